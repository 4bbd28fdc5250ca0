"""
Document Intake API - Main Entry Point

Runs the FastAPI application with uvicorn.
"""

import uvicorn

from intake.config import get_settings

if __name__ == "__main__":
    settings = get_settings()

    if not settings.mongodb_uri:
        print("Info: MONGODB_URI not set. Documents will be kept in memory only.")
    else:
        print(f"Info: MONGODB_URI found. Documents will be stored in '{settings.database_name}'.")

    # Run the server
    uvicorn.run(
        "intake.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers if not settings.reload else 1,
        reload=settings.reload,
        log_level=settings.log_level.lower()
    )
