"""Plugin subsystem for recording lifecycle extensions."""

from steppack.plugins.base import (
    PLUGIN_API_VERSION,
    PLUGIN_CONFIG_ENV_VAR,
    PLUGIN_CONFIG_VERSION,
    LifecyclePlugin,
    RecordingEvent,
    RecordingStartEvent,
    RecordingStepEvent,
    RecordingStopEvent,
)
from steppack.plugins.exceptions import PluginConfigError, PluginError, PluginLoadError
from steppack.plugins.loader import load_plugin_manager_from_file
from steppack.plugins.manager import PluginDiagnostic, PluginManager
from steppack.plugins.reference import LifecycleTracePlugin
from steppack.plugins.runtime import (
    get_active_plugin_manager,
    reset_plugin_runtime_cache,
    use_plugin_manager,
    use_plugins_from_config,
)

__all__ = [
    "PLUGIN_API_VERSION",
    "PLUGIN_CONFIG_VERSION",
    "PLUGIN_CONFIG_ENV_VAR",
    "PluginError",
    "PluginConfigError",
    "PluginLoadError",
    "RecordingEvent",
    "RecordingStartEvent",
    "RecordingStepEvent",
    "RecordingStopEvent",
    "LifecyclePlugin",
    "PluginDiagnostic",
    "PluginManager",
    "LifecycleTracePlugin",
    "load_plugin_manager_from_file",
    "get_active_plugin_manager",
    "use_plugin_manager",
    "use_plugins_from_config",
    "reset_plugin_runtime_cache",
]
