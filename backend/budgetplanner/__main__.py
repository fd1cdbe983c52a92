"""
Run the API server with uvicorn.
"""

import uvicorn

from budgetplanner.config import settings


def main():
    uvicorn.run(
        "budgetplanner.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
