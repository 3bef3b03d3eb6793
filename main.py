"""Entrypoint for the Foresight research backend."""
from __future__ import annotations

from dotenv import load_dotenv

import uvicorn
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
load_dotenv()

from foresight.main import app as fastapi_app
from foresight.config import get_config

app = fastapi_app
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if __name__ == "__main__":  # pragma: no cover
    uvicorn.run("main:app", host="0.0.0.0", port=4000, reload=get_config().is_dev)
