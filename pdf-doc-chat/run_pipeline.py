#!/usr/bin/env python3
"""
Main entry point for extracting a PDF from the command line.
"""
import argparse
import os
import sys
import uuid


def main(argv=None) -> int:
    # Ensure package imports work when running this file directly
    sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

    from config.pipeline_config import PipelineConfig
    from services.cache_service import DocumentCache
    from services.document_service import DocumentService
    from services.redis_service import get_redis_client
    from services.session_service import SessionStore
    from utils.file_utils import normalize_path

    parser = argparse.ArgumentParser(description="Extract text from a PDF with a vision model.")
    parser.add_argument("pdf", help="Path to the PDF file")
    parser.add_argument("--session", default=None, help="Session id (default: a new random id)")
    parser.add_argument("--batch-size", type=int, default=None, help="Pages per request")
    parser.add_argument("--workers", type=int, default=None, help="Maximum concurrent requests")
    parser.add_argument("--model", default=None, help="Model name override")
    parser.add_argument("--output", default=None, help="Write extracted text here instead of stdout")
    args = parser.parse_args(argv)

    config = PipelineConfig.from_settings().with_overrides(
        batch_size=args.batch_size,
        max_concurrent_requests=args.workers,
        model=args.model,
    )
    redis_client = get_redis_client()
    service = DocumentService(DocumentCache(redis_client, config.cache_ttl_seconds), SessionStore(redis_client))

    result = service.process_document(normalize_path(args.pdf), args.session or str(uuid.uuid4()), config)
    if "error" in result:
        print(f"❌ {result['error']}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result["extractedText"])
        print(f"✅ Wrote {len(result['pages'])} page(s) to {args.output}")
    else:
        print(result["extractedText"])

    if result["unresolvedPages"]:
        print(f"⚠️ Unresolved pages: {result['unresolvedPages']}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
