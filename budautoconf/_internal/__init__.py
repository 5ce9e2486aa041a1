"""Internal implementation details for budautoconf.

WARNING: This module is internal and should not be imported directly.
All public API is exported from the top-level budautoconf package.

The internal structure:
- sdk.py: AutoConfiguredSdkBuilder and ProviderBundle
- config.py: ConfigProperties snapshot and property merging
- customizers.py: Customizer chains and registry
- discovery.py: Entry point based plugin discovery
- resource.py / meter.py / tracer.py / logs.py / propagators.py: per-signal configuration
- processors.py: Batch processors reporting self-monitoring metrics
- exporters/: Named exporter factories and fan-out exporters
- shutdown.py: Bounded concurrent shutdown
- main.py: Process-wide default bundle
"""

from __future__ import annotations

__all__: list[str] = []
