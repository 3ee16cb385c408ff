"""
Pipelines — Kubeflow Pipelines (KFP v2) components and the CSV ingestion
pipeline definition.

Each component is a Python function decorated with ``@kfp.dsl.component``
so it can run in its own container; the field-mapping logic itself lives
in the ``csv_indexer`` package.
"""
