#!/usr/bin/env python3
"""Create (or look up) a user and print a bearer token for it.

Credential issuance lives outside the API; operators use this script to
provision users and hand out tokens.

Usage:
    python scripts/issue_token.py alice [--email alice@example.com] [--avatar-url URL]
"""

import argparse
import asyncio
import sys
from uuid import uuid4

import logfire

from discuss.config import Settings
from discuss.domain.model import User
from discuss.domain.value import UserId, Username
from discuss.persistence.database import create_engine, create_session_factory
from discuss.persistence.repository import PostgresUserRepository
from discuss.util.jwt import create_token
from discuss.util.observability import configure_logfire


async def issue_token(
    settings: Settings, username: str, email: str | None, avatar_url: str | None
) -> str:
    """Find or create the user and return a signed token for it."""
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)
    try:
        async with session_factory() as session:
            repository = PostgresUserRepository(session)
            name = Username(username)

            user = await repository.find_by_username(name)
            if not user:
                user = await repository.save(
                    User(
                        id=UserId(uuid4()),
                        username=name,
                        email=email,
                        avatar_url=avatar_url,
                    )
                )
                await session.commit()
                logfire.info("User created", user_id=str(user.id), username=username)

            return create_token(str(user.id), user.username.root, settings.auth)
    finally:
        await engine.dispose()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("username")
    parser.add_argument("--email", default=None)
    parser.add_argument("--avatar-url", default=None)
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)

    token = asyncio.run(
        issue_token(settings, args.username, args.email, args.avatar_url)
    )
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
