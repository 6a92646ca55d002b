"""Domain models and errors.

- Pure data structures (Pydantic v2) describing machines, executions and
  retry outcomes.
- The domain knows nothing about boto3, typer or rich.
"""
