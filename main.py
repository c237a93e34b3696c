"""
Chunked Caption Generator — script entry point.

    python main.py talk.mp4

Installed as the `chunk-captions` command; see pipeline/cli.py.
"""

from pipeline.cli import main


if __name__ == "__main__":
    main()
