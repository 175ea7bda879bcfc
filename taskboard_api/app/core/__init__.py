"""
Cross‑cutting infrastructure: configuration, logging, security and
the exception taxonomy shared by services and routers.
"""
