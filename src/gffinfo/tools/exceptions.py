class GffError(Exception):
    """base exception for anything wrong with the GFF input"""
    pass


class MalformedAttributeError(GffError):
    """an attribute pair in column 9 does not split into exactly one key and one value"""

    def __init__(self, pair: str, attributes: str):
        super().__init__(f"Bad attribute pair : {pair!r} : {attributes!r}")
        self.pair = pair
        self.attributes = attributes


class MalformedFeatureLineError(GffError):
    """a feature line has the wrong number of columns or bad coordinates"""
    pass


class UnresolvedParentReferenceError(GffError):
    """a Parent attribute points at an ID that no feature carries"""

    def __init__(self, parent_id: str):
        super().__init__(f"ID missing : {parent_id!r}")
        self.parent_id = parent_id


class MissingScaffoldError(GffError):
    """sequence was requested for a feature whose scaffold is not in the file"""

    def __init__(self, seq_id: str):
        super().__init__(f"No scaffold by the name : {seq_id}")
        self.seq_id = seq_id
