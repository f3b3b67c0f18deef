__version__ = "1.0.0"

APP_NAME = "Probe & Load Service"
APP_DESCRIPTION = "Health probes, CPU load generation and chaos hooks for Kubernetes demos"
