#!/usr/bin/env python
"""API server entrypoint for Routinely."""

import os

from routinely import create_app

app = create_app(os.getenv("ROUTINELY_ENV", "development"))

if __name__ == "__main__":
    app.run(host=os.getenv("ROUTINELY_HOST", "0.0.0.0"), port=int(os.getenv("ROUTINELY_PORT", "5000")))
