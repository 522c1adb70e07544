"""Pydantic response models for the web API."""

from typing import Optional

from pydantic import BaseModel


class SicboResponse(BaseModel):
    """Public /sicbo payload; field names are the published contract."""

    phien: str
    xuc_xac_1: Optional[int] = None
    xuc_xac_2: Optional[int] = None
    xuc_xac_3: Optional[int] = None
    tong: int
    ket_qua: str
    phien_hien_tai: str
    du_doan: str
    dudoan_vi: str
    do_tin_cay: str


class PredictionDetail(BaseModel):
    session: str
    next_session: str
    outcome: str
    confidence: float
    rationale: str
    fallback: bool = False
    streak: int = 0
    break_probability: float = 0.0
    votes: dict[str, str] = {}
    scores: dict[str, float] = {}
    weights: dict[str, float] = {}
