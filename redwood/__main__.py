#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Run the Redwood server:  python -m redwood
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from redwood.core.config import get_settings


# -----------------------------------------------------------------------------

def main() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(
        "Starting %s %s on %s:%d", settings.app_name, settings.app_version, settings.host, settings.port,
    )
    uvicorn.run(
        "redwood.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
