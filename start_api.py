"""
Start the Keen Analytics API server
"""
import uvicorn
from dotenv import load_dotenv

load_dotenv()

from keen.api.settings import get_api_settings

if __name__ == "__main__":
    settings = get_api_settings()
    print("\n" + "=" * 60)
    print("Starting Keen Analytics API Server")
    print("=" * 60)
    print(f"URL:  http://localhost:{settings.port}")
    print(f"Docs: http://localhost:{settings.port}/docs")
    print(f"Data: {settings.data_file}")
    print("=" * 60 + "\n")

    uvicorn.run(
        "keen.api.app:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level="info",
    )
