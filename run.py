#!/usr/bin/env python3
"""
Client Ledger Entry Point

Starts the FastAPI server with a fresh, empty ledger.
"""

import sys

from client_ledger.api import run_server
from client_ledger.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("Starting Client Ledger...")
    print(f"Snapshots stored in: {config.snapshot_dir}")
    print(f"API available at: http://{config.api_host}:{config.api_port}{config.api_prefix}")
    print()
    
    try:
        run_server(debug=False)
    except KeyboardInterrupt:
        print("\nShutting down Client Ledger...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
