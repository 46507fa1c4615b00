# healthconnect/db/models/profile.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from healthconnect.db.base import Base

class ProfileModel(Base):
    __tablename__ = "profiles"

    # shares the account's primary key
    id         = Column(Integer,
                        ForeignKey("users.id", ondelete="CASCADE"),
                        primary_key=True)

    full_name  = Column(String(120), nullable=False)
    email      = Column(String,      nullable=False)
    phone      = Column(String(30))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("UserModel", back_populates="profile")
