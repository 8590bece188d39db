# File: civic_reports\db\base.py
# Project: civic-reports-backend
# Auto-added for reference

from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    pass
