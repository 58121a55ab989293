from crm import setup

setup.run()

from crm.network.http.server import server as http_server  # noqa: E402

# Booted with: uvicorn crm.network.http.launch:server
server = http_server
