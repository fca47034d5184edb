from __future__ import annotations

import signal

import structlog
from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand

from modules.products.rpc.server import create_server

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    help = "Serve the products.Products gRPC service until terminated."

    def add_arguments(self, parser):
        parser.add_argument(
            "--port",
            type=int,
            default=settings.GRPC_PORT,
            help="Port to listen on (default: GRPC_PORT setting).",
        )
        parser.add_argument(
            "--max-workers",
            type=int,
            default=settings.GRPC_MAX_WORKERS,
            help="Size of the RPC worker thread pool.",
        )
        parser.add_argument(
            "--seed",
            action="store_true",
            help="Seed the demo catalog before serving if the table is empty.",
        )
        parser.add_argument(
            "--grace",
            type=float,
            default=5.0,
            help="Seconds in-flight RPCs get to finish on shutdown.",
        )

    def handle(self, *args, **options):
        if options["seed"]:
            call_command("seed_products", stdout=self.stdout)

        server, port = create_server(
            port=options["port"], max_workers=options["max_workers"]
        )

        def _shutdown(signum, frame):
            logger.info("grpc_server.stopping", signal=signum)
            server.stop(options["grace"])

        signal.signal(signal.SIGTERM, _shutdown)
        signal.signal(signal.SIGINT, _shutdown)

        server.start()
        logger.info("grpc_server.started", port=port)
        self.stdout.write(self.style.SUCCESS(f"gRPC server listening on port {port}"))
        server.wait_for_termination()
        logger.info("grpc_server.stopped")
