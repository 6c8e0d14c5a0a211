from .grammars import SAMPLE_GRAMMARS
