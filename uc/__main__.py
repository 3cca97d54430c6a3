"""
This allows uc to be run as a module with `python -m uc`.
"""
from .main import main

if __name__ == "__main__":
    main()
