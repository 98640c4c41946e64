# services/dashboard_service.py
from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Environment, Payment, PaymentLink, PaymentStatus
from services.money import format_cents

RECENT_LIMIT = 8


def merchant_overview(db: Session, merchant_id: str, environment: Environment) -> dict:
     """Headline numbers plus recent payments and links for the dashboard home."""
     links = db.query(PaymentLink).filter(
          PaymentLink.merchant_id == merchant_id,
          PaymentLink.environment == environment,
     )
     payments = (
          db.query(Payment)
          .join(PaymentLink, Payment.link_id == PaymentLink.id)
          .filter(
               PaymentLink.merchant_id == merchant_id,
               PaymentLink.environment == environment,
          )
     )
     confirmed = payments.filter(Payment.status == PaymentStatus.CONFIRMED)
     confirmed_sum = confirmed.with_entities(func.coalesce(func.sum(Payment.amount_usd_cents), 0)).scalar() or 0

     return {
          "active_links": links.filter(PaymentLink.is_active.is_(True)).count(),
          "total_links": links.count(),
          "confirmed_payments": confirmed.count(),
          "processed_cents": int(confirmed_sum),
          "processed_display": format_cents(int(confirmed_sum)),
          "recent_payments": payments.order_by(Payment.created_at.desc()).limit(RECENT_LIMIT).all(),
          "recent_links": links.order_by(PaymentLink.created_at.desc()).limit(RECENT_LIMIT).all(),
     }
