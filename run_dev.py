# run_dev.py
"""
Local development launcher for FastAPI.
Equivalent to: `uvicorn llm_proxy.app:app --reload --host $HOST --port $PORT`
"""

import uvicorn

from llm_proxy.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "llm_proxy.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
