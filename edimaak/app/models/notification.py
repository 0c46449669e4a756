"""
Notification Database Model.

In-app notifications shown in the notification bell.
"""

import enum
import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, Enum
from sqlalchemy.sql import func
from edimaak.app.db.session import Base


class NotificationType(str, enum.Enum):
    INFO = "info"
    MATCH_PROPOSED = "match_proposed"
    MATCH_ACCEPTED = "match_accepted"
    MATCH_REJECTED = "match_rejected"
    MATCH_COMPLETED = "match_completed"


class Notification(Base):
    """
    In-App Notification.
    Stores messages for users.
    """
    __tablename__ = "notifications"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    
    # Recipient
    user_id = Column(String(64), nullable=False, index=True)
    
    # Content
    type = Column(
        Enum(NotificationType, name="notification_type", values_callable=lambda e: [m.value for m in e]),
        default=NotificationType.INFO, nullable=False
    )
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    related_id = Column(String(36), nullable=True)  # match id for match events
    
    # State
    is_read = Column(Boolean, default=False, nullable=False, index=True)
    read_at = Column(DateTime(timezone=True), nullable=True)
    
    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Notification(id={self.id}, user={self.user_id}, title='{self.title}')>"
