__version__ = "1.0.0"

from . import event, exporter, utils
from .exporter import Exporter
from .reading import Datapoint, Reading, render_value
from .plugin import plugin_info, plugin_init, plugin_send, plugin_shutdown
