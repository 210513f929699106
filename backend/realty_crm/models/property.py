from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from realty_crm.core.database import Base


class PropertyType(str, enum.Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    LAND = "land"
    INDUSTRIAL = "industrial"


class PropertyStatus(str, enum.Enum):
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"
    OFF_MARKET = "off-market"


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=PropertyStatus.AVAILABLE.value, index=True)
    price = Column(Float, nullable=False, index=True)

    # Embedded sub-documents; address and features are also searched on,
    # see PropertyRepository.search
    address = Column(JSON, nullable=False)
    features = Column(JSON, nullable=True)
    amenities = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)
    owner = Column(JSON, nullable=True)

    agent_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    views = Column(Integer, nullable=False, default=0)
    favorites = Column(Integer, nullable=False, default=0)

    listing_date = Column(DateTime, server_default=func.now())
    last_updated = Column(DateTime, server_default=func.now())
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    agent = relationship("User", back_populates="properties")
    clients = relationship("Client", secondary="client_properties", back_populates="properties")

    @property
    def owner_id(self) -> int:
        return self.agent_id

    @property
    def full_address(self) -> str:
        address = self.address or {}
        return (
            f"{address.get('street', '')}, {address.get('city', '')}, "
            f"{address.get('state', '')} {address.get('zip_code', '')}"
        )
