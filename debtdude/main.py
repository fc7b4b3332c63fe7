"""FastAPI application for DebtDude."""

import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from debtdude.config import settings
from debtdude.db.memory import ConversationStore, get_store
from debtdude.models import (
    AnalyzeRequest,
    ConversationCreate,
    DashboardRequest,
    MessageCreate,
)
from debtdude.services.analysis import analyze_transactions, dashboard_summary
from debtdude.services.chat import InsufficientDataError, send_message
from debtdude.utils.time import utc_now

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="DebtDude",
    description="Financial assistant backend with transaction-grounded chat",
    version="0.1.0",
)

# CORS for the mobile/web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup():
    """Log configuration on startup."""
    settings.log_config()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "OK", "timestamp": utc_now().isoformat()}


@app.post("/api/analyze")
async def analyze(request: AnalyzeRequest):
    """Get financial analysis for a specific period."""
    try:
        analysis = analyze_transactions(request.transactions, request.period)
    except Exception as e:
        logger.exception("Analysis error")
        raise HTTPException(status_code=500, detail=f"Failed to analyze transactions: {str(e)}")
    return {"success": True, "data": analysis}


@app.post("/api/dashboard")
async def dashboard(request: DashboardRequest):
    """Get spending overview for the dashboard."""
    try:
        summary = dashboard_summary(request.transactions)
    except Exception as e:
        logger.exception("Dashboard error")
        raise HTTPException(status_code=500, detail=f"Failed to get dashboard data: {str(e)}")
    return {"success": True, "data": summary}


# ==================== CONVERSATION ENDPOINTS ====================


@app.get("/api/conversations")
async def list_conversations(user_id: str | None = None, store: ConversationStore = Depends(get_store)):
    """Get conversations, optionally for a single user."""
    return {"success": True, "data": store.list_conversations(user_id=user_id)}


@app.post("/api/conversations")
async def create_conversation(request: ConversationCreate, store: ConversationStore = Depends(get_store)):
    """Create a new conversation."""
    conversation = store.create_conversation(title=request.title, user_id=request.user_id)
    return {"success": True, "data": conversation}


@app.get("/api/conversations/{conversation_id}/messages")
async def get_messages(conversation_id: str, store: ConversationStore = Depends(get_store)):
    """Get messages for a conversation."""
    return {"success": True, "data": store.list_messages(conversation_id)}


@app.post("/api/conversations/{conversation_id}/messages")
async def post_message(
    conversation_id: str,
    request: MessageCreate,
    store: ConversationStore = Depends(get_store),
):
    """
    Send a message to a conversation and get the assistant's reply.

    Questions about the user's own finances are only answered when
    transactions are supplied; otherwise this returns 400.
    """
    if not request.message or not request.user_id:
        raise HTTPException(status_code=400, detail="Message and userId are required")

    try:
        exchange = await send_message(store, conversation_id, request.message, request.transactions)
    except InsufficientDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Send message error")
        raise HTTPException(status_code=500, detail=f"Failed to send message: {str(e)}")

    return {"success": True, "data": exchange}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "debtdude.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.dev_mode,
    )
