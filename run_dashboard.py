#!/usr/bin/env python
"""
Run the dashboard server for the blog article client.
"""
import uvicorn
from dashboard import create_dashboard_app
from src.config import Config


def main():
    """Run the dashboard server."""
    config = Config()
    app = create_dashboard_app(config=config)

    print("Starting dashboard server...")
    print(f"Blog API: {config.blog_api_base_url}")
    print(f"Listening on http://{config.dashboard_host}:{config.dashboard_port}")

    uvicorn.run(
        app,
        host=config.dashboard_host,
        port=config.dashboard_port,
        log_level="info"
    )


if __name__ == "__main__":
    main()
