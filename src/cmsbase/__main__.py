"""Entry point for 'python -m cmsbase' command."""

from cmsbase.cli import main

if __name__ == "__main__":
    main()
