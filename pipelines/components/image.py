"""Container image the CSV ingestion components run in.

Build it from the repository root, then push it where the cluster can
pull it and point ``CSV_INDEXER_IMAGE`` at that tag before compiling::

    docker build -t csv-indexer:0.1.0 .
"""

import os

CSV_INDEXER_IMAGE = os.environ.get("CSV_INDEXER_IMAGE", "csv-indexer:0.1.0")
