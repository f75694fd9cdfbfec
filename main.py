"""
Mookuauhau Server Entry Point

Run with: python main.py
Or with uvicorn: uvicorn app:app --reload
"""

import uvicorn

from mookuauhau.config import load_config

if __name__ == "__main__":
    server = load_config().server

    uvicorn.run(
        "app:app",
        host=server.host,
        port=server.port,
        reload=server.reload,
        log_level="info",
    )
