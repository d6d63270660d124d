"""
Entry point for replaying a session with `python -m backend script.yaml`.

FSE-112: Replay a session from a script
"""
from backend.cli import main

if __name__ == "__main__":
    main()
