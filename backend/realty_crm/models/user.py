from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from realty_crm.core.database import Base


class UserRole(str, enum.Enum):
    USER = "user"
    AGENT = "agent"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    # String instead of SQLEnum, values are the UserRole strings
    role = Column(String(50), nullable=False, default=UserRole.USER.value)
    is_active = Column(Boolean, nullable=False, default=True)
    phone = Column(String(50), nullable=True)
    company = Column(String(255), nullable=True)
    profile_image = Column(String, nullable=True)
    last_login = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    clients = relationship("Client", back_populates="assigned_agent")
    leads = relationship("Lead", back_populates="assigned_agent")
    properties = relationship("Property", back_populates="agent")
