"""
Shared Kernel Module
====================

Infrastructure and API plumbing shared by every module of the service
(structured logging, HTTP middleware).

DO NOT add classification business logic to the shared kernel; it belongs
in the triage module.
"""

__version__ = "1.0.0"
