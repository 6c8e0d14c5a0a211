from .cyk import (
    CELL_SEPARATOR,
    EMPTY_CELL,
    CYKTable,
    algorithm_state_to_string,
    check_query,
    cyk_parse,
    is_derived,
)
