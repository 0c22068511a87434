from typing import List, Optional
from pathlib import Path
import logging
import os

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles

from luckydraw.api.schemas import (
    ParticipantOut, ParticipantList, AddTextRequest, AddResponse,
    DeduplicateResponse, ParticipantSettings,
    DrawSettings, DrawStartResponse, DrawState,
    GroupRequest, GroupOut, GroupSetResponse,
)
from luckydraw.core.errors import InvalidConfigurationError
from luckydraw.core.logger import setup_logging
from luckydraw.core.settings import settings, make_session
from luckydraw.services.participant_store import Participant
from luckydraw.services.session import LuckyDrawSession

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Lucky Draw & Grouping API", version="1.0.0")

# ---------------- CORS ----------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------- Static ----------------
BASE_DIR = Path(__file__).resolve().parent.parent     # <root>/
STATIC_ROOT_1 = BASE_DIR / "static"
STATIC_ROOT_2 = BASE_DIR / "luckydraw" / "static"

mounted = False
for folder in (STATIC_ROOT_1, STATIC_ROOT_2):
    if folder.exists():
        app.mount("/static", StaticFiles(directory=str(folder)), name="static")
        logger.info(f"[STATIC] serving /static from: {folder}")
        mounted = True
        break

if not mounted:
    logger.warning("[STATIC] no 'static' folder found at the root or in luckydraw/.")

# ---------------- Session ----------------
session: LuckyDrawSession = make_session()


def get_session() -> LuckyDrawSession:
    return session


def _participant(p: Optional[Participant]) -> Optional[ParticipantOut]:
    if p is None:
        return None
    return ParticipantOut(id=p.id, name=p.name)


def _participants(items) -> List[ParticipantOut]:
    return [ParticipantOut(id=p.id, name=p.name) for p in items]


def _group_set(sess: LuckyDrawSession) -> GroupSetResponse:
    return GroupSetResponse(
        group_size=sess.state.group_size,
        groups=[
            GroupOut(label=f"Group {idx}", members=_participants(group))
            for idx, group in enumerate(sess.groups, start=1)
        ],
    )


# ---------------- Health / Config ----------------
@app.get("/health")
async def health(sess: LuckyDrawSession = Depends(get_session)):
    return {
        "status": "ok",
        "participants": len(sess.store),
        "drawing": sess.draw.in_progress,
    }

@app.get("/healthz")
async def healthz(sess: LuckyDrawSession = Depends(get_session)):
    return await health(sess)

@app.get("/config")
async def public_config(sess: LuckyDrawSession = Depends(get_session)):
    return {
        "draw_duration_ms": sess.draw.duration_ms,
        "draw_interval_ms": sess.draw.interval_ms,
        "draw_steps": sess.draw.steps,
        "allow_repeat": sess.draw.allow_repeat,
        "auto_deduplicate": sess.state.auto_deduplicate,
        "group_size": sess.state.group_size,
        "export_filename": settings.export_filename,
    }


# ---------------- Participants ----------------
@app.get("/participants", response_model=ParticipantList)
async def list_participants(sess: LuckyDrawSession = Depends(get_session)):
    return ParticipantList(
        participants=_participants(sess.store),
        total=len(sess.store),
        auto_deduplicate=sess.state.auto_deduplicate,
    )

@app.post("/participants/text", response_model=AddResponse)
async def add_from_text(req: AddTextRequest, sess: LuckyDrawSession = Depends(get_session)):
    added = sess.add_text(req.text, dedupe=req.dedupe)
    return AddResponse(added=added, total=len(sess.store))

@app.post("/participants/upload", response_model=AddResponse)
async def upload_csv(
    file: UploadFile = File(...),
    dedupe: Optional[bool] = None,
    sess: LuckyDrawSession = Depends(get_session),
):
    """CSV without header; every non-blank cell becomes a participant."""
    content = await file.read()
    added = sess.add_csv(
        content,
        dedupe=dedupe,
        encoding=settings.csv_encoding,
        sep=settings.csv_sep,
    )
    logger.info(f"[Import] {file.filename}: {added} participant(s) added")
    return AddResponse(added=added, total=len(sess.store))

@app.post("/participants/deduplicate", response_model=DeduplicateResponse)
async def deduplicate(sess: LuckyDrawSession = Depends(get_session)):
    removed = sess.deduplicate()
    return DeduplicateResponse(removed=removed, total=len(sess.store))

@app.put("/participants/settings", response_model=ParticipantSettings)
async def participant_settings(req: ParticipantSettings, sess: LuckyDrawSession = Depends(get_session)):
    sess.set_auto_deduplicate(req.auto_deduplicate)
    return ParticipantSettings(auto_deduplicate=sess.state.auto_deduplicate)

@app.delete("/participants/{participant_id}")
async def remove_participant(participant_id: str, sess: LuckyDrawSession = Depends(get_session)):
    removed = sess.remove(participant_id)
    return {"ok": True, "removed": removed, "total": len(sess.store)}

@app.delete("/participants")
async def clear_participants(sess: LuckyDrawSession = Depends(get_session)):
    sess.clear()
    return {"ok": True}


# ---------------- Draw ----------------
@app.get("/draw", response_model=DrawState)
async def draw_state(sess: LuckyDrawSession = Depends(get_session)):
    draw = sess.draw
    return DrawState(
        in_progress=draw.in_progress,
        status=draw.status,
        current=_participant(draw.current_display),
        history=_participants(draw.history),
        eligible_count=len(sess.eligible()),
        allow_repeat=draw.allow_repeat,
    )

@app.put("/draw/settings", response_model=DrawSettings)
async def draw_settings(req: DrawSettings, sess: LuckyDrawSession = Depends(get_session)):
    sess.set_allow_repeat(req.allow_repeat)
    return DrawSettings(allow_repeat=sess.draw.allow_repeat)

@app.post("/draw/start", response_model=DrawStartResponse)
async def draw_start(sess: LuckyDrawSession = Depends(get_session)):
    return DrawStartResponse(started=sess.start_draw())

@app.delete("/draw/history")
async def clear_history(sess: LuckyDrawSession = Depends(get_session)):
    sess.clear_history()
    return {"ok": True}


# ---------------- Groups ----------------
@app.post("/groups", response_model=GroupSetResponse)
async def generate_groups(req: GroupRequest, sess: LuckyDrawSession = Depends(get_session)):
    try:
        sess.generate_groups(req.group_size)
    except InvalidConfigurationError as e:
        raise HTTPException(422, str(e))
    return _group_set(sess)

@app.get("/groups", response_model=GroupSetResponse)
async def list_groups(sess: LuckyDrawSession = Depends(get_session)):
    return _group_set(sess)

@app.delete("/groups")
async def clear_groups(sess: LuckyDrawSession = Depends(get_session)):
    sess.clear_groups()
    return {"ok": True}

@app.get("/groups/export")
async def export_groups(sess: LuckyDrawSession = Depends(get_session)):
    csv_text = sess.export_csv(sep=settings.csv_sep)
    return Response(
        content=csv_text.encode(settings.csv_encoding),
        media_type=f"text/csv; charset={settings.csv_encoding}",
        headers={"Content-Disposition": f'attachment; filename="{settings.export_filename}"'},
    )


# ---------------- Lifecycle ----------------
@app.on_event("startup")
async def on_startup():
    logger.info(
        f"[Startup] reveal {settings.draw_duration_ms}ms every {settings.draw_interval_ms}ms, "
        f"group size {settings.default_group_size}"
    )


@app.on_event("shutdown")
async def on_shutdown():
    # no repeating reveal callback may outlive the app
    session.close()


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run("luckydraw.app:app", host="0.0.0.0", port=port, proxy_headers=True)
