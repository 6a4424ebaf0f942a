"""Allow `python -m notevault`."""

from notevault.main import main

if __name__ == "__main__":
    main()
