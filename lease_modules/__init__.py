"""
Lease Modules.

Thin orchestration over the Lease Kernel and Engines.  Each module
contains:
- Domain models (the nouns)
- Posting profiles (event -> journal entry shapes)
- Configuration schemas
- A service facade

Modules:
- Lease: IFRS 16 schedules, remeasurement and journal entries
"""
