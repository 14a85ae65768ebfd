from tinylink.dao.base import LinkBaseDAO, InsertOutcome


__all__ = [
    'LinkBaseDAO',
    'InsertOutcome',
]
