"""
Script to run the FastAPI server.
"""
import sys

import uvicorn

from cloud_price_compare.utils.db_config import get_port


if __name__ == "__main__":
    port = get_port()
    try:
        print("Starting Cloud Price Compare API...")
        print(f"API documentation will be available at: http://0.0.0.0:{port}/docs")
        uvicorn.run("cloud_price_compare.main:app", host="0.0.0.0", port=port, reload=True)
    except KeyboardInterrupt:
        print("\nShutting down gracefully...")
    except Exception as e:
        print(f"Error starting the server: {str(e)}")
        sys.exit(1)
