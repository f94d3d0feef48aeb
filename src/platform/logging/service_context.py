"""
Service context for log lines.

Identifies which process produced a log line when several API workers and the
cart sweeper write to the same collector.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'museum-ticketing')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    if deploy_env == 'local_dev':
        instance = str(os.getpid())
    else:
        instance = f'{socket.gethostname()[:12]}-{os.getpid()}'

    return f'{service_name}@{deploy_env}:{instance}'
