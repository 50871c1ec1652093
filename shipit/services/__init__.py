"""
Services for shipit.

- execution: command runner and signal handling
- deploy: deploy orchestration and project naming
- secrets: credential storage
- panel: deploy panel message protocol
"""
