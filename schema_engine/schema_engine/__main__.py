"""Module entrypoint for `python -m schema_engine`.

Delegates to the validate CLI implementation.
"""

from .run_validate import main


if __name__ == "__main__":
    main()
