# farmledger/models/farmer_models.py
from pydantic import BaseModel, Field


class Farmer(BaseModel):
    farmerId: str = Field(..., min_length=1)
    name: str
    phone: str
    email: str
    address: str
    # region doubles as the raw inventory category
    region: str
    gps: str
