"""Core contracts.

- `Protocol` definitions implemented by adapters (workflow service), the CLI
  (operator prompts) and the remediation actions.
- The core depends on these abstractions, never on concrete implementations.
"""
