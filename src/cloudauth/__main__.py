"""Entry point for 'python -m cloudauth'."""

from cloudauth.cli import main

if __name__ == "__main__":
    main()
