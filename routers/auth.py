# routers/auth.py
"""
Account API: register, login, logout.

Sessions live in an HTTP-only cookie; see services/session_auth.py for the
token and rotation rules.
"""
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from config import session_cookie_name
from database import get_session
from dependencies import no_store, require_same_origin
from schemas.auth import LoginRequest, RegisterRequest
from services import account_service
from services.session_auth import clear_session_cookie, end_session, set_session_cookie

router = APIRouter(
     prefix="/api/auth",
     tags=["auth"],
     dependencies=[Depends(require_same_origin), Depends(no_store)],
)


@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Register a merchant account")
def register(body: RegisterRequest, response: Response, db: Session = Depends(get_session)):
     """
     Create a user plus merchant profile and sign the user in.

     - **409** if the email is already registered
     """
     account = account_service.register_account(db, body.name, body.email, body.password)
     set_session_cookie(response, account.session)
     return {"ok": True, "merchantId": account.merchant.id}


@router.post("/login", summary="Sign in")
def login(body: LoginRequest, response: Response, db: Session = Depends(get_session)):
     """
     Verify credentials and start a new session, ending any previous one.

     `onboardingRequired` is true until a settlement wallet is on file.
     """
     outcome = account_service.login(db, body.email, body.password)
     set_session_cookie(response, outcome.session)
     return {"ok": True, "onboardingRequired": outcome.onboarding_required}


@router.post("/logout", summary="Sign out")
def logout(request: Request, response: Response, db: Session = Depends(get_session)):
     end_session(db, request.cookies.get(session_cookie_name()))
     clear_session_cookie(response)
     return {"ok": True}
