# potion_server/models/potion.py

from sqlalchemy import Column, Float, Integer, String
from . import Base


class Potion(Base):
    __tablename__ = "potions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Float)
    vendor = Column(String, index=True)
    category = Column(String, index=True)
    strength = Column(Float)
    flavor = Column(Float)
    score = Column(Float)
