from .recognizers import (
    MAX_ITERATIONS,
    BfsRecognizer,
    CykRecognizer,
    DfsRecognizer,
    Recognizer,
    RecognizerError,
    recognize,
)
