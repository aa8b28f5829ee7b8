# sar_api/infrastructure/database/models.py

from sqlalchemy import JSON, Column, DateTime, String

from sar_api.infrastructure.database.session import Base


class SarRecord(Base):
    """
    ORM row for a SAR. status and created_at are real indexed columns so list filters are
    pushed into SQL; the full record lives in the JSON document column.
    """

    __tablename__ = "suspicious_activity_reports"

    id = Column(String(36), primary_key=True)
    status = Column(String(16), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    document = Column(JSON, nullable=False)
