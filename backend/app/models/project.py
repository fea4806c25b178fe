# backend/app/models/project.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base

class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    directory_path = Column(String, nullable=True)

    # Dependent rows are removed explicitly by the delete endpoint
    tasks = relationship("Task", back_populates="project", passive_deletes=True)
    notes = relationship("Note", back_populates="project", passive_deletes=True)
    citations = relationship("Citation", back_populates="project", passive_deletes=True)
