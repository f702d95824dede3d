# run.py
"""
run.py - Development server launcher for the Sponsorship Platform

This file lives in the project ROOT directory (same level as 'sponsorapp/').
Do NOT put application logic here; only use it to start the dev server.

Usage:
    python run.py
    APP_CONFIG=production python run.py
"""

import os
import sys

# Ensure the project root is in sys.path (helps when running from subdirectories)
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

try:
    from sponsorapp import create_app
except ImportError as e:
    print("Error: Cannot import 'create_app' from 'sponsorapp'.")
    print("Install the project first (pip install -e .) and run from the project root.")
    print(f"Current working directory: {os.getcwd()}")
    print(f"Detailed error: {e}")
    sys.exit(1)

# Create Flask app instance
app = create_app(os.environ.get('APP_CONFIG', 'development'))

if __name__ == '__main__':
    port = int(os.environ.get('PORT', '5000'))
    print("Starting Sponsorship Platform development server...")
    print(f" * Running on http://127.0.0.1:{port} (Press CTRL+C to quit)")
    print(f" * Debug mode: {'ON' if app.debug else 'OFF'}")

    app.run(
        debug=app.debug,
        host='0.0.0.0',          # Allow access from local network / other devices
        port=port,
        use_reloader=app.debug,
        threaded=True
    )
