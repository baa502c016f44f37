"""
Main entry point for the chatroom server.

Usage:
    python run_fastapi.py

Or with uvicorn directly:
    uvicorn chatroom.fastapi_app:app --host 0.0.0.0 --port 8000 --reload
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

import uvicorn

if __name__ == "__main__":
    env = os.getenv("ENVIRONMENT", "development")
    debug = env == "development"
    port = int(os.getenv("PORT", 8000))
    host = os.getenv("HOST", "0.0.0.0")

    print(f"Starting chatroom server in {env} mode...")
    print(f"Server running on http://{host}:{port}")
    print(f"Live updates on ws://{host}:{port}/ws")

    uvicorn.run(
        "chatroom.fastapi_app:app",
        host=host,
        port=port,
        reload=debug,
        log_level="info" if debug else "warning",
    )
