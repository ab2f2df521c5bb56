from __future__ import annotations

import os

import uvicorn

from activity_dashboard.app.main import app


def run() -> None:
    """Run the activity dashboard with environment-aware port."""

    port = int(os.getenv("PORT", 5000))
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
