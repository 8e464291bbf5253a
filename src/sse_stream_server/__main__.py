"""Allow ``python -m sse_stream_server``."""

from .main import main

main()
