# =============================================================================
# File: run.py
# Purpose: Entry point for development. Starts the blog on the configured port.
# =============================================================================
# run.py
from blogapp import create_app

app = create_app()

if __name__ == "__main__":
    app.run(port=app.config["PORT"], debug=True)
