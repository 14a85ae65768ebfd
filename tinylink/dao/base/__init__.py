from tinylink.dao.base.link_base_dao import LinkBaseDAO, InsertOutcome


__all__ = [
    'LinkBaseDAO',
    'InsertOutcome',
]
