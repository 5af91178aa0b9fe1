import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from backend.app.config import load_settings
from backend.app.history import HistoryStore, HistoryUnavailable
from solver import METHODS, solve

logger = logging.getLogger(__name__)

settings = load_settings()

app = FastAPI(title="LinSolver API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings["cors_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_history_store() -> HistoryStore:
    return HistoryStore.from_settings(settings)


class SolveRequest(BaseModel):
    equations: list[str]
    method: Optional[str] = None
    user_id: Optional[str] = None
    show_steps: bool = True


class Solution(BaseModel):
    status: str
    variables: Optional[dict[str, float]] = None
    message: Optional[str] = None
    steps: Optional[list[str]] = None


class SolveResponse(BaseModel):
    solution: Solution


class HistoryRecord(BaseModel):
    id: str
    user_id: str
    equations: list[str]
    method: str
    solution: dict[str, float]
    created_at: str


class HistoryResponse(BaseModel):
    equations: list[HistoryRecord]


@app.post("/api/solve", response_model=SolveResponse)
def solve_system(req: SolveRequest, store: HistoryStore = Depends(get_history_store)):
    equations = [eq.strip() for eq in req.equations if eq.strip()]
    if len(equations) < 2:
        raise HTTPException(status_code=400, detail="At least two equations are required")
    if req.method not in METHODS:
        raise HTTPException(status_code=400, detail="Valid method is required")

    result = solve(equations, req.method, steps=req.show_steps)

    if result.ok and req.user_id:
        try:
            store.add_record(req.user_id, equations, req.method, result.variables)
        except (HistoryUnavailable, OSError):
            # The answer is still returned when history cannot be written.
            logger.exception("Error saving solution to history")

    return {"solution": result.to_dict()}


def _require_user(user_id: Optional[str]) -> str:
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=400, detail="User ID is required")
    return user_id.strip()


@app.get("/api/history", response_model=HistoryResponse)
def list_history(user_id: Optional[str] = Query(None),
                 store: HistoryStore = Depends(get_history_store)):
    user_id = _require_user(user_id)
    try:
        records = store.get_records(user_id)
    except (HistoryUnavailable, OSError):
        logger.exception("Error retrieving equation history")
        raise HTTPException(status_code=500, detail="Failed to retrieve history")
    return {"equations": records}


@app.delete("/api/history/{record_id}")
def delete_history_item(record_id: str, user_id: Optional[str] = Query(None),
                        store: HistoryStore = Depends(get_history_store)):
    user_id = _require_user(user_id)
    try:
        deleted = store.delete_record(user_id, record_id)
    except (HistoryUnavailable, OSError):
        logger.exception("Error deleting history record %s", record_id)
        raise HTTPException(status_code=500, detail="Failed to delete history record")
    if not deleted:
        raise HTTPException(status_code=404, detail="History record not found")
    return {"deleted": record_id}


@app.delete("/api/history")
def clear_history(user_id: Optional[str] = Query(None),
                  store: HistoryStore = Depends(get_history_store)):
    user_id = _require_user(user_id)
    try:
        removed = store.clear(user_id)
    except (HistoryUnavailable, OSError):
        logger.exception("Error clearing history for %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to clear history")
    return {"deleted": removed}
