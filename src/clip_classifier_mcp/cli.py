"""Command-line interface for clip-classifier-mcp."""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Literal

from .classification import HybridContentClassifier, explain
from .config import ClipClassifierConfig
from .server import create_mcp_server

# Configure logging - default to WARNING to reduce verbosity
logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def read_input(source: str) -> str:
    """Read text from a file path, or from stdin when source is "-"."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


async def classify_only(
    source: str,
    config: ClipClassifierConfig,
    use_remote: bool = False,
    show_explanation: bool = False,
) -> int:
    """
    Classify a single input and print the result as JSON.

    Args:
        source: File path, or "-" for stdin
        config: Classifier configuration
        use_remote: Refine the language with the remote detector
        show_explanation: Include the scoring breakdown

    Returns:
        Exit code: 0 for success, 1 for failure
    """
    classifier = None
    try:
        text = read_input(source)
        logger.info(f"Classifying {len(text)} characters from {source}")

        classifier = HybridContentClassifier.from_config(config)
        if use_remote:
            result = await classifier.detect(text, use_remote=True)
        else:
            result = classifier.classify(text)

        output = result.to_dict()
        if show_explanation:
            code_score, ranking = explain(text)
            output["explanation"] = {
                "code_score": code_score.to_dict(),
                "language_ranking": ranking.to_dict(),
            }

        print(json.dumps(output, indent=2))
        return 0

    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {source}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if classifier is not None:
            await classifier.close()


async def main(
    config: ClipClassifierConfig,
    transport: Literal["stdio", "sse", "http"] = "stdio",
    host: str = "127.0.0.1",
    port: int = 8000,
    path: str = "/mcp/",
) -> None:
    """
    Main entry point for the clip-classifier MCP server.

    Args:
        config: Classifier configuration
        transport: Transport type (stdio, sse, http)
        host: HTTP/SSE server host
        port: HTTP/SSE server port
        path: HTTP/SSE server path
    """
    logger.info("=" * 60)
    logger.info("Starting clip-classifier MCP Server")
    logger.info("=" * 60)
    logger.info(f"Transport: {transport}")
    if transport in ["http", "sse"]:
        logger.info(f"Server endpoint: {transport}://{host}:{port}{path}")

    remote = config.remote
    if remote.enabled:
        logger.info(f"Remote detection: {remote.provider} ({remote.model})")
        if remote.base_url:
            logger.info(f"  Base URL: {remote.base_url}")
        if remote.api_key:
            masked_key = f"{remote.api_key[:7]}...{remote.api_key[-4:]}" if len(remote.api_key) > 11 else "*" * len(remote.api_key)
            logger.debug(f"  API Key: {masked_key}")
    else:
        logger.info("Remote detection disabled - using local heuristic only")

    classifier = HybridContentClassifier.from_config(config)
    mcp = create_mcp_server(classifier, config)
    logger.info("MCP server created")

    try:
        match transport:
            case "http":
                logger.info(f"HTTP server starting on http://{host}:{port}{path}")
                await mcp.run_http_async(host=host, port=port, path=path, stateless_http=True)
            case "stdio":
                logger.info("STDIO server starting - ready for connections")
                await mcp.run_stdio_async()
            case "sse":
                logger.info(f"SSE server starting on http://{host}:{port}{path}")
                await mcp.run_sse_async(host=host, port=port, path=path)
            case _:
                raise ValueError(f"Unsupported transport: {transport}")
    finally:
        logger.info("Shutting down server...")
        await classifier.close()
        logger.info("Server shutdown complete")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clip-classifier-mcp",
        description="Clip Classifier - decide whether pasted text is code, and which language",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify a file once and print JSON
  clip-classifier-mcp --classify snippet.txt

  # Classify stdin and show the scoring breakdown
  pbpaste | clip-classifier-mcp --classify - --explain

  # Run as an MCP server over stdio (default)
  clip-classifier-mcp

  # Run as HTTP server
  clip-classifier-mcp --transport http --port 8080

Remote Language Detection:
  export LANGUAGE_DETECTION_PROVIDER=openai
  export LANGUAGE_DETECTION_API_KEY=your-api-key
  export LANGUAGE_DETECTION_MODEL=gpt-4o-mini          # optional
  export LANGUAGE_DETECTION_BASE_URL=https://gateway/v1  # optional
        """,
    )

    parser.add_argument(
        "--classify",
        "-c",
        metavar="PATH",
        default=None,
        help="Classify a file (or '-' for stdin) and exit (mutually exclusive with --transport)",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Include the scoring breakdown with --classify",
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Refine the language with the remote detector with --classify",
    )

    parser.add_argument(
        "--transport",
        "-t",
        choices=["stdio", "http", "sse"],
        default=None,
        help="Transport type (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="HTTP/SSE server host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="HTTP/SSE server port (default: 8000)",
    )
    parser.add_argument(
        "--path",
        default=None,
        help="HTTP/SSE server path (default: /mcp/)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def cli(argv: list[str] | None = None):
    """Command-line interface for clip-classifier-mcp."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger("clip_classifier_mcp").setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.WARNING)

    if args.classify and args.transport:
        parser.error("--classify and --transport are mutually exclusive")
    if (args.explain or args.remote) and not args.classify:
        parser.error("--explain and --remote require --classify")

    try:
        config = ClipClassifierConfig.from_env()
    except ValueError as e:
        parser.error(f"Invalid configuration: {e}")

    transport = args.transport or os.getenv("MCP_TRANSPORT", "stdio")
    host = args.host or os.getenv("MCP_HOST", "127.0.0.1")
    port = args.port or int(os.getenv("MCP_PORT", "8000"))
    path = args.path or os.getenv("MCP_PATH", "/mcp/")

    try:
        if args.classify:
            exit_code = asyncio.run(
                classify_only(
                    source=args.classify,
                    config=config,
                    use_remote=args.remote,
                    show_explanation=args.explain,
                )
            )
            sys.exit(exit_code)
        else:
            asyncio.run(
                main(
                    config=config,
                    transport=transport,
                    host=host,
                    port=port,
                    path=path,
                )
            )
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    cli()
