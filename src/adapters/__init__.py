"""Adapters connecting the core to the Bot API, the config file and the host."""
