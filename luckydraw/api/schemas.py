# luckydraw/api/schemas.py
from typing import Optional, List, Union
from pydantic import BaseModel, StrictInt, StrictStr

# -------- Participants --------
class ParticipantOut(BaseModel):
    id: str
    name: str

class ParticipantList(BaseModel):
    participants: List[ParticipantOut]
    total: int
    auto_deduplicate: bool

class AddTextRequest(BaseModel):
    text: str = ""
    # None -> use the session's auto_deduplicate toggle
    dedupe: Optional[bool] = None

class AddResponse(BaseModel):
    added: int
    total: int

class DeduplicateResponse(BaseModel):
    removed: int
    total: int

class ParticipantSettings(BaseModel):
    auto_deduplicate: bool

# -------- Draw --------
class DrawSettings(BaseModel):
    allow_repeat: bool

class DrawStartResponse(BaseModel):
    started: bool

class DrawState(BaseModel):
    in_progress: bool
    status: str  # idle | choosing | winner
    current: Optional[ParticipantOut] = None
    history: List[ParticipantOut]
    eligible_count: int
    allow_repeat: bool

# -------- Groups --------
class GroupRequest(BaseModel):
    # validated by the grouping engine so bad values map to one error
    group_size: Optional[Union[StrictInt, StrictStr]] = None

class GroupOut(BaseModel):
    label: str
    members: List[ParticipantOut]

class GroupSetResponse(BaseModel):
    group_size: int
    groups: List[GroupOut]
