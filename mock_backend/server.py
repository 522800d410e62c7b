from fastapi import FastAPI, HTTPException, Request
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Finance Backend", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/backend_stub") if os.path.exists("/backend_stub") else Path(__file__).resolve().parent / "stub"

# Settings updates are kept in memory for the lifetime of the process
_settings_overrides: dict = {}


def _load_user(user_id: str) -> dict:
    file = DATA_DIR / f"user_{user_id}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="user not found")
    return json.loads(file.read_text())


@app.get("/health")
def health(): return {"status": "ok"}


@app.get("/users/{user_id}/settings")
def get_settings(user_id: str):
    data = _load_user(user_id)
    return {**data["settings"], **_settings_overrides.get(user_id, {})}


@app.patch("/users/{user_id}/settings")
async def update_settings(user_id: str, request: Request):
    data = _load_user(user_id)
    _settings_overrides.setdefault(user_id, {}).update(await request.json())
    return {**data["settings"], **_settings_overrides[user_id]}


@app.get("/users/{user_id}/obligations")
def list_obligations(user_id: str):
    return {"obligations": _load_user(user_id)["obligations"]}


@app.get("/users/{user_id}/obligations/{obligation_type}/{obligation_id}")
def get_obligation(user_id: str, obligation_type: str, obligation_id: str):
    for obligation in _load_user(user_id)["obligations"]:
        if obligation["obligationType"] == obligation_type and obligation["id"] == obligation_id:
            return obligation
    raise HTTPException(status_code=404, detail="obligation not found")
