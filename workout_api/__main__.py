"""
Entry point for running the API with ``python -m workout_api``.
"""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "workout_api.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
