from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from realty_crm.core.database import Base


class ClientType(str, enum.Enum):
    BUYER = "buyer"
    SELLER = "seller"
    BOTH = "both"


class ClientStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    CLOSED = "closed"


class ClientSource(str, enum.Enum):
    WEBSITE = "website"
    REFERRAL = "referral"
    WALK_IN = "walk-in"
    SOCIAL_MEDIA = "social-media"
    OTHER = "other"


client_properties = Table(
    "client_properties",
    Base.metadata,
    Column("client_id", Integer, ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True),
    Column("property_id", Integer, ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
)


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=True)
    type = Column(String(20), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ClientStatus.ACTIVE.value, index=True)
    source = Column(String(30), nullable=False, default=ClientSource.WEBSITE.value)

    # Embedded sub-documents
    preferences = Column(JSON, nullable=True)
    notes = Column(JSON, nullable=False, default=list)
    documents = Column(JSON, nullable=False, default=list)

    assigned_agent_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    last_contact = Column(DateTime, server_default=func.now())

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    assigned_agent = relationship("User", back_populates="clients")
    properties = relationship("Property", secondary=client_properties, back_populates="clients")
    converted_leads = relationship("Lead", back_populates="converted_client")

    @property
    def owner_id(self) -> int:
        return self.assigned_agent_id

    @property
    def property_ids(self) -> list[int]:
        return [prop.id for prop in self.properties]
