from kioku.consts import VERSION

__version__ = VERSION
