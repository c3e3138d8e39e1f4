"""Allow ``python -m quantumsketches``."""
from quantumsketches.main import main

if __name__ == "__main__":
    main()
