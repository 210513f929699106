from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from realty_crm.core.database import Base


class LeadStatus(str, enum.Enum):
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    UNQUALIFIED = "unqualified"
    CONVERTED = "converted"
    LOST = "lost"


class LeadSource(str, enum.Enum):
    WEBSITE = "website"
    REFERRAL = "referral"
    SOCIAL_MEDIA = "social-media"
    ZILLOW = "zillow"
    REALTOR = "realtor"
    OTHER = "other"


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    source = Column(String(30), nullable=False)
    status = Column(String(20), nullable=False, default=LeadStatus.NEW.value, index=True)
    type = Column(String(20), nullable=False)

    preferences = Column(JSON, nullable=True)
    notes = Column(JSON, nullable=False, default=list)

    assigned_agent_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    follow_up_date = Column(DateTime, nullable=True, index=True)
    last_contact = Column(DateTime, server_default=func.now())

    # Conversion
    conversion_date = Column(DateTime, nullable=True)
    converted_to_id = Column(Integer, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    assigned_agent = relationship("User", back_populates="leads")
    converted_client = relationship("Client", back_populates="converted_leads")

    @property
    def owner_id(self) -> int | None:
        return self.assigned_agent_id

    @property
    def converted_to(self) -> int | None:
        return self.converted_to_id
