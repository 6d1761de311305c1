# ============================================================
# PostCraft AI FastAPI App
# ------------------------------------------------------------
# This app wires everything together:
#   - Post generation (scratch / rewrite / image) + scoring
#   - Strategy assistant chat sessions
#   - Support for Groq, OpenAI-compatible, or Echo clients
# ============================================================

from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field
from typing import List, Optional

# --- Local imports ---
from src.settings import settings
from src.log import get_logger
from src.generate import PostGenerator, PostRequest
from src.generate.errors import (
    InvalidRequestError,
    MissingCredentialError,
    PostCraftError,
    ProviderError,
    SessionBusyError,
)
from src.generate.prompts import AUDIENCES, FIELDS, QUICK_QUESTIONS, THEMES, WORD_COUNTS
from src.generate.scoring import calculate_engagement_score
from src.generate.types import MODES
from src.generate.clients.echo_dev_client import EchoDevClient
from src.session import ChatSession, SessionStore

logger = get_logger("app")


# ------------------------------------------------------------
# 🔧 Model client selection
# ------------------------------------------------------------
def select_model_client(engine: Optional[str] = None):
    engine = (engine or settings.ENGINE).lower()
    if engine == "echo":
        return EchoDevClient()
    if engine == "openai":
        from src.generate.clients.openai_client import OpenAIClient
        return OpenAIClient(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            timeout=settings.REQUEST_TIMEOUT,
        )
    from src.generate.clients.groq_client import GroqClient
    return GroqClient(
        api_key=settings.GROQ_API_KEY,
        base_url=settings.GROQ_BASE_URL,
        timeout=settings.REQUEST_TIMEOUT,
    )


model_client = select_model_client()
post_gen = PostGenerator(model_client=model_client)

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="PostCraft AI API", version="0.1")
app.state.sessions = SessionStore(max_sessions=settings.MAX_CHAT_SESSIONS)

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class GenerateRequest(BaseModel):
    mode: str = "scratch"
    content: str = ""
    field: str = "Marketing"
    audience: str = "Professionals"
    theme: str = "Inform"
    word_count: int = Field(default=100, gt=0)
    optimize: bool = True
    image: Optional[str] = None
    image_prompt: str = ""

class PostPayload(BaseModel):
    text: str
    headline: str
    hashtags: List[str]
    display_hashtags: List[str]
    score: int
    structured: bool
    raw_text: str
    copy_text: str

class ScoreRequest(BaseModel):
    text: str = ""

class ChatMessagePayload(BaseModel):
    id: int
    sender: str
    text: str
    structured: bool = False
    headline: Optional[str] = None
    post: Optional[str] = None
    hashtags: Optional[List[str]] = None

class SessionPayload(BaseModel):
    id: str
    in_flight: bool
    messages: List[ChatMessagePayload]

class SendRequest(BaseModel):
    text: str

class SendPayload(BaseModel):
    reply: Optional[ChatMessagePayload]
    session: SessionPayload

# ------------------------------------------------------------
# 🧯 Error mapping
# ------------------------------------------------------------
def to_http_error(e: PostCraftError) -> HTTPException:
    if isinstance(e, InvalidRequestError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, SessionBusyError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, MissingCredentialError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, ProviderError):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))

def get_session(session_id: str) -> ChatSession:
    try:
        return app.state.sessions.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown chat session: {session_id}")

# ------------------------------------------------------------
# ✍️ Post generation routes
# ------------------------------------------------------------
@app.post("/posts/generate", response_model=PostPayload)
def generate_post(req: GenerateRequest):
    try:
        result = post_gen.generate(PostRequest(**req.model_dump()))
    except PostCraftError as e:
        logger.error("generation failed (%s): %s", req.mode, e)
        raise to_http_error(e)
    return result.to_dict()

@app.post("/posts/score")
def score_post(req: ScoreRequest):
    return {"score": calculate_engagement_score(req.text)}

@app.get("/options")
def options():
    return {
        "modes": list(MODES),
        "fields": FIELDS,
        "audiences": AUDIENCES,
        "themes": THEMES,
        "word_counts": WORD_COUNTS,
        "defaults": {
            "mode": "scratch",
            "field": "Marketing",
            "audience": "Professionals",
            "theme": "Inform",
            "word_count": 100,
            "optimize": True,
        },
    }

# ------------------------------------------------------------
# 💬 Assistant routes
# ------------------------------------------------------------
@app.get("/assistant/quick-questions")
def quick_questions():
    return {"questions": QUICK_QUESTIONS}

@app.post("/assistant/sessions", response_model=SessionPayload)
def create_session():
    session = app.state.sessions.create()
    return session.to_dict()

@app.get("/assistant/sessions/{session_id}", response_model=SessionPayload)
def read_session(session_id: str):
    return get_session(session_id).to_dict()

@app.delete("/assistant/sessions/{session_id}")
def delete_session(session_id: str):
    try:
        app.state.sessions.delete(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown chat session: {session_id}")
    return {"deleted": session_id}

@app.post("/assistant/sessions/{session_id}/messages", response_model=SendPayload)
async def send_message(session_id: str, req: SendRequest):
    session = get_session(session_id)

    async def responder(history):
        return await run_in_threadpool(post_gen.chat, history)

    try:
        reply = await session.send(req.text, responder)
    except PostCraftError as e:
        raise to_http_error(e)
    return {
        "reply": reply.to_dict() if reply else None,
        "session": session.to_dict(),
    }

@app.post("/assistant/sessions/{session_id}/cancel")
def cancel_message(session_id: str):
    return {"cancelled": get_session(session_id).cancel()}

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/healthz")
def healthz():
    return {
        "ok": True,
        "env": settings.ENV,
        "debug": settings.DEBUG,
        "app": settings.app_name,
        "engine": type(model_client).__name__,
    }

@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}

@app.get("/")
def hello():
    return {"message": "PostCraft AI service running."}
