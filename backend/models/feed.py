from sqlalchemy import Column, Integer, String, Date, Numeric, ForeignKey, Enum
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin, now_ist


class FeedType(enum.Enum):
    STARTER = "starter"
    GROWER = "grower"
    FINISHER = "finisher"
    LAYER_MASH = "layer_mash"
    FISH_FEED = "fish_feed"
    CATTLE_FEED = "cattle_feed"
    GOAT_FEED = "goat_feed"
    SHEEP_FEED = "sheep_feed"
    HAY = "hay"
    SILAGE = "silage"
    BEE_FEED = "bee_feed"


class FeedRecord(Base, TimestampMixin):
    __tablename__ = "feed_record"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    batch_id = Column(Integer, ForeignKey("batch.id"), nullable=False, index=True)
    date = Column(Date, default=lambda: now_ist().date())
    feed_type = Column(Enum(FeedType), nullable=False)
    quantity_kg = Column(Numeric(12, 2), nullable=False)
    cost = Column(Numeric(12, 2), default=0)

    batch = relationship("Batch", back_populates="feed_records")
