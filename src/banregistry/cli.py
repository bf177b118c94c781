"""
Commandes d'exploitation du registre.

    python -m banregistry.cli worker
    python -m banregistry.cli requeue
    python -m banregistry.cli force-certification communes.txt
    python -m banregistry.cli ensure-indexes
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from banregistry.common.clients.mongo_client import ensure_indexes, get_database
from banregistry.common.logging import setup_logging
from banregistry.config.settings import get_settings

logger = logging.getLogger(__name__)


def read_codes(path: Path) -> List[str]:
    """Un code commune par ligne ; lignes vides et commentaires ignorés."""
    codes = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            codes.append(line)
    return codes


def cmd_worker(args: argparse.Namespace) -> int:
    from banregistry.queue.worker import run_worker

    run_worker(queue_name=args.queue, requeue=args.requeue)
    return 0


def cmd_requeue(args: argparse.Namespace) -> int:
    from banregistry.services.registry import get_registry

    jobs = get_registry().composition.requeue_asked_compositions()
    print(f"{len(jobs)} composition(s) renvoyée(s)")
    return 0


def cmd_force_certification(args: argparse.Namespace) -> int:
    from banregistry.services.registry import get_registry

    codes = read_codes(args.file)
    result = get_registry().force_certification.update_communes_force_certification(codes)

    print(f"Ajoutées : {', '.join(result.communes_added) or '-'}")
    print(f"Retirées : {', '.join(result.communes_removed) or '-'}")
    for code, error in sorted(result.composition_errors.items()):
        print(f"❌ {code}: {error}", file=sys.stderr)

    return 1 if result.composition_errors else 0


def cmd_ensure_indexes(args: argparse.Namespace) -> int:
    ensure_indexes(get_database())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="banregistry", description="Registre d'adresses")
    subparsers = parser.add_subparsers(dest="command", required=True)

    worker = subparsers.add_parser("worker", help="Lancer le worker de composition")
    worker.add_argument("--queue", default=None, help="Nom de la file (défaut: COMPOSITION_QUEUE)")
    worker.add_argument("--requeue", action="store_true", help="Renvoyer les compositions en attente avant de démarrer")
    worker.set_defaults(func=cmd_worker)

    requeue = subparsers.add_parser("requeue", help="Renvoyer les compositions en attente")
    requeue.set_defaults(func=cmd_requeue)

    force = subparsers.add_parser("force-certification", help="Réconcilier les communes en certification forcée")
    force.add_argument("file", type=Path, help="Fichier contenant un code commune par ligne")
    force.set_defaults(func=cmd_force_certification)

    indexes = subparsers.add_parser("ensure-indexes", help="Créer les index MongoDB")
    indexes.set_defaults(func=cmd_ensure_indexes)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.logs_dir, "cli.log", level=logging.DEBUG if settings.debug_mode else logging.INFO)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
