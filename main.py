import logging
import sys
import json
import argparse
import uuid
from typing import Any, Dict, List

from core.config_loader import load_config, AppConfig
from core.discovery import MatchDiscoveryService
from core.exceptions import ServiceException
from database.database import db_session_scope, get_engine
from database.init_db import init_db
from database.repositories import UserRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Marks seeded accounts as unable to log in until a password is set
UNUSABLE_PASSWORD = "!"


def seed_users(repo: UserRepository, records: List[Dict[str, Any]]) -> int:
    """Create users with their skill lists, skipping emails that already exist."""
    created = 0
    for record in records:
        record = dict(record)
        skills_offered = record.pop('skills_offered', [])
        skills_wanted = record.pop('skills_wanted', [])
        email = record.pop('email')

        if repo.get_by_email(email):
            logger.info(f"Skipping existing user {email}")
            continue

        user = repo.create_user(
            email=email,
            password_hash=record.pop('password_hash', UNUSABLE_PASSWORD),
            name=record.pop('name'),
            **record
        )
        repo.replace_skills(user, skills_offered, skills_wanted)
        created += 1

    logger.info(f"Seeded {created} of {len(records)} users")
    return created


def run_discovery(config: AppConfig, user_id: str, limit: int) -> List[Dict[str, Any]]:
    with db_session_scope(config.database.url) as session:
        service = MatchDiscoveryService(UserRepository(session), config.matching)
        candidates = service.find_potential_matches(uuid.UUID(user_id), limit=limit)

        return [
            {
                'user_id': str(c.candidate.id),
                'name': c.candidate.name,
                'score': c.score,
                'exchanges': [
                    {
                        'from_user_id': str(o.from_user_id),
                        'to_user_id': str(o.to_user_id),
                        'skill_name': o.skill_name,
                        'proficiency': o.proficiency.value,
                        'priority': o.priority.value,
                    }
                    for o in c.proposed_exchanges
                ],
            }
            for c in candidates
        ]


def main():
    parser = argparse.ArgumentParser(description="SkillBarter Main Driver")
    parser.add_argument('--mode', type=str, choices=['init-db', 'seed', 'discover', 'serve'], default='serve',
                        help='init-db: create tables, seed: load users from JSON, '
                             'discover: print potential matches, serve: run the web API (default)')
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    parser.add_argument('--user-id', type=str, help='User to run discovery for')
    parser.add_argument('--limit', type=int, default=None, help='Maximum matches to print')
    parser.add_argument('--file', type=str, help='JSON file with a list of users to seed')
    args = parser.parse_args()

    config = load_config(args.config)
    logger.info(f"Main driver starting in {args.mode.upper()} mode...")

    if args.mode == 'init-db':
        init_db(get_engine(config.database.url))

    elif args.mode == 'seed':
        if not args.file:
            parser.error("--file is required for seed mode")
        with open(args.file, 'r', encoding='utf-8') as f:
            records = json.load(f)
        init_db(get_engine(config.database.url))
        with db_session_scope(config.database.url) as session:
            seed_users(UserRepository(session), records)

    elif args.mode == 'discover':
        if not args.user_id:
            parser.error("--user-id is required for discover mode")
        limit = args.limit if args.limit is not None else config.matching.default_limit
        try:
            results = run_discovery(config, args.user_id, limit)
        except ServiceException as e:
            logger.error(f"Discovery failed: {e}")
            sys.exit(1)
        print(json.dumps(results, indent=2))

    else:
        from web.backend.app import main as serve
        serve()


if __name__ == "__main__":
    main()
