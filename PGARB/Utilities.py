__all__ = [ "strtobool" ]

TRUE_STRINGS = ( "y", "yes", "t", "true", "on", "1" )
FALSE_STRINGS = ( "n", "no", "f", "false", "off", "0" )

def strtobool(value: str) -> bool:
    '''
        Converts a string representation of truth to True or False.
        True values are y, yes, t, true, on and 1; false values are n, no, f, false, off and 0 (case-insensitive).
        Raises ValueError for anything else
    '''
    lowered = value.strip().lower()
    if lowered in TRUE_STRINGS:
        return True
    elif lowered in FALSE_STRINGS:
        return False
    else:
        raise ValueError("Invalid truth value: {}".format(value))
