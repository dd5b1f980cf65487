"""Allow ``python -m tierroute``."""

from tierroute import main

if __name__ == "__main__":
    main()
