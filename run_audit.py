import asyncio
import json
import os
import sys

# Add backend to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "backend")))

from auditor.errors import InvalidSiteUrlError
from auditor.services.audit_runner import audit_site


async def main(url: str) -> int:
    print(f"Running audit for {url}...", file=sys.stderr)
    try:
        result = await audit_site(url)
    except InvalidSiteUrlError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result.model_dump(by_alias=True), indent=2))
    print(
        f"Tier: {result.tier} | overall {result.scores.overall} ({result.grades.overall}) | "
        f"{result.scope.scanned_pages} pages scanned",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python run_audit.py <domain-or-url>", file=sys.stderr)
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1])))
