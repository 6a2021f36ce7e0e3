from pydantic import BaseModel
from typing import Dict


class MatchOdds(BaseModel):
    match: str
    odds: Dict[str, float]
