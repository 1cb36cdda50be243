"""
Pure engine: classification index/resolver, availability rules and
discount arithmetic. Import submodules directly; nothing here touches the ORM
except ``classification_navigation``.
"""
