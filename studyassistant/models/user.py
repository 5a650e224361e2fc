
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from studyassistant.db.session import Base

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(50), default="user", nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    lectures = relationship("Lecture", back_populates="owner")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
