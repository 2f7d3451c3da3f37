"""
Read-only runtime diagnostics served over HTTP from a daemon thread.
"""
import gc
import logging
import os
import resource
import sys
import threading
import time
import traceback

import torch
from flask import Flask, Response, jsonify
from werkzeug.serving import make_server


logger = logging.getLogger("spiral_nn.diagnostics")

_STARTED_AT = time.time()


def create_app() -> Flask:
    app = Flask(__name__)

    @app.route('/debug/')
    def index():
        return jsonify(routes=["/debug/stats", "/debug/threads", "/debug/gc"])

    @app.route('/debug/stats')
    def stats():
        usage = resource.getrusage(resource.RUSAGE_SELF)
        return jsonify(
            pid=os.getpid(),
            uptime_seconds=time.time() - _STARTED_AT,
            threads=threading.active_count(),
            gc_counts=list(gc.get_count()),
            max_rss_kb=usage.ru_maxrss,
            user_cpu_seconds=usage.ru_utime,
            system_cpu_seconds=usage.ru_stime,
            torch_threads=torch.get_num_threads(),
        )

    @app.route('/debug/threads')
    def threads():
        names = {t.ident: t.name for t in threading.enumerate()}
        lines = []
        for ident, frame in sys._current_frames().items():
            lines.append(f"--- thread {names.get(ident, '?')} ({ident})")
            lines.extend(line.rstrip("\n") for line in traceback.format_stack(frame))
        return Response("\n".join(lines) + "\n", mimetype="text/plain")

    @app.route('/debug/gc')
    def gc_stats():
        return jsonify(generations=gc.get_stats(), objects=len(gc.get_objects()))

    return app


def _serve(host: str, port: int, ready: threading.Event, holder: dict) -> None:
    try:
        server = make_server(host, port, create_app(), threaded=True)
    except (Exception, SystemExit) as e:
        # werkzeug exits instead of raising on some bind failures
        logger.error(f"Diagnostic endpoint could not bind {host}:{port}: {e!r}")
        ready.set()
        return
    holder["server"] = server
    ready.set()
    logger.info(f"Diagnostic endpoint listening on http://{host}:{port}/debug/")
    server.serve_forever()


def start_diagnostics(host: str = "localhost", port: int = 6060, wait: float = 5.0):
    """Start the endpoint in a daemon thread.

    Returns the werkzeug server, or None when it could not be started.
    A failure is logged and never raised.
    """
    ready = threading.Event()
    holder = {}
    thread = threading.Thread(
        target=_serve, args=(host, port, ready, holder), name="spiral-nn-diagnostics", daemon=True)
    thread.start()
    ready.wait(wait)
    return holder.get("server")
