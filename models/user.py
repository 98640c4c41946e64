# models/user.py
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow


class User(Base):
     """
     User model - the login identity behind a merchant.
     Passwords are stored as bcrypt hashes only.
     """
     __tablename__ = "users"

     id = Column(String(36), primary_key=True, default=new_id)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password_hash = Column(String(255), nullable=False)
     created_at = Column(DateTime, default=utcnow, nullable=False)

     # Relationships
     merchant = relationship("Merchant", back_populates="user", uselist=False)
     sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
