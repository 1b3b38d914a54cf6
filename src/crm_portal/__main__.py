from __future__ import annotations

import sys

import uvicorn
from dotenv import load_dotenv
from pydantic import ValidationError

from crm_portal.app import create_app
from crm_portal.config import MissingConfigError, load_portal_config


def main() -> None:
    load_dotenv()

    try:
        config = load_portal_config()
    except MissingConfigError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)
    except ValidationError as exc:
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        sys.exit(1)

    uvicorn.run(
        create_app(config),
        host=config.network.bind_host,
        port=config.network.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
