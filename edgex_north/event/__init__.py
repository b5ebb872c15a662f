from .builder import (asset_names, build_envelope, build_envelopes,
                      build_reading_entries, origin_timestamp)
from .models import Envelope, ReadingEntry
