from enum import IntFlag


def mirror_dict(dct):
    """Creates a new dictionary exchanging values for keys
    Args:
      - dct (mapping): Dictionary to be inverted
    """
    return {value: key for key, value in dct.items()}


class IterableFlag(IntFlag):
    def __iter__(self):
        """Composed flags are iterable: yields each single flag set in self"""
        for element in self.__class__:
            if self & element:
                yield element

    def __contains__(self, element):
        """if self is a group of various flags ored together, this returns if 'element' is contained in then"""
        if not isinstance(element, self.__class__):
            return False
        return bool(self & element)
