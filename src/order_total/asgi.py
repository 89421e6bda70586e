from __future__ import annotations

from order_total.bootstrap import create_asgi_app

app = create_asgi_app()
