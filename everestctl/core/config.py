import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(Path.cwd(), '.env'))

EVEREST_URL = os.getenv('EVEREST_URL', 'http://127.0.0.1:8080')

EVEREST_KUBERNETES_ID = os.getenv('EVEREST_KUBERNETES_ID')

EVEREST_REQUEST_TIMEOUT = float(os.getenv('EVEREST_REQUEST_TIMEOUT', '30'))

KUBECONFIG_PATH = Path(os.getenv('KUBECONFIG', Path(Path.home(), '.kube', 'config'))).expanduser()
