from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text

from clinicpos.infrastructure.database import Base


class Role(Base):
    """Named permission set; ``permissions`` is a module -> action -> bool map"""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text)
    permissions = Column(JSON, default=dict)
    created_at = Column(DateTime, default=datetime.now)


class User(Base):
    """Staff login account"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    # bcrypt hash; rows imported from older installs may still hold plaintext
    password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(50))
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="SET NULL"))
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now)


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(50), nullable=False)
    module = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    user_id = Column(Integer)
    user_name = Column(String(255))
    # "metadata" is reserved on declarative classes
    details = Column("metadata", JSON)
    created_at = Column(DateTime, default=datetime.now, index=True)
