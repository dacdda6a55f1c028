# License: BSD3

"""
Annotation type declarations

A type system is handed to us once per run by whoever knows about the
schema (for us, usually just `TypeSystem.default`).  It says which
annotation types exist and which features each of them carries, with
the kind of value each feature holds.  It is frozen once built.

The pipeline stages do not create types on the fly; they ask the type
system to confirm that what they are about to write has been declared ::

    tsys = TypeSystem.default()
    tsys.require('Unit', ['score'])    # fine
    tsys.require('Unit', ['goodness']) # SchemaError
"""

from collections import OrderedDict

from frozendict import frozendict

from .errors import SchemaError


SENTENCE = 'Sentence'
TOKEN = 'Token'
UNIT = 'Unit'
AGGREGATE = 'Aggregate'

SCORE = 'score'
"name of the float feature carried by units and aggregates"


class AnnotationType(object):
    """
    A named annotation type and the features declared for it

    :param name: type name (eg. "Unit")
    :type name: string

    :param features: feature name to value kind (eg. `float`); the
        order of declaration is preserved
    :type features: sequence of (string, type) pairs, or dict
    """
    def __init__(self, name, features=None):
        if not name:
            raise SchemaError("annotation types must have a name")
        pairs = features.items() if hasattr(features, 'items')\
            else (features or [])
        self.name = name
        self.features = frozendict(OrderedDict(pairs))

    def __str__(self):
        feats = ", ".join("%s: %s" % (k, v.__name__)
                          for k, v in self.features.items())
        return "%s{%s}" % (self.name, feats)

    def __repr__(self):
        return "AnnotationType(%r, %r)" % (self.name, dict(self.features))

    def __eq__(self, other):
        return isinstance(other, AnnotationType) and\
            self.name == other.name and\
            self.features == other.features

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.name, tuple(self.features.items())))

    def kind(self, feature):
        """
        Value kind of a declared feature

        Raise SchemaError if the feature is not declared for this type
        """
        if feature not in self.features:
            raise SchemaError("feature '%s' is not declared for type %s"
                              % (feature, self))
        return self.features[feature]

    def check_value(self, feature, value):
        """
        Return `value` converted to the kind declared for `feature`.

        `None` is accepted for any feature and means "not set".
        Ints are accepted for float features; anything else of the wrong
        kind is a SchemaError.
        """
        kind = self.kind(feature)
        if value is None or isinstance(value, kind):
            return value
        if kind is float and isinstance(value, int) and\
                not isinstance(value, bool):
            return float(value)
        raise SchemaError("feature %s.%s expects %s, got %r"
                          % (self.name, feature, kind.__name__, value))


class TypeSystem(object):
    """
    An immutable set of annotation type declarations, looked up by name
    """
    def __init__(self, types):
        table = OrderedDict()
        for atype in types:
            if atype.name in table and table[atype.name] != atype:
                raise SchemaError("conflicting declarations for type %s"
                                  % atype.name)
            table[atype.name] = atype
        self._types = frozendict(table)

    @classmethod
    def default(cls):
        """
        The declarations needed by the unit scoring pipeline ::

            Sentence{}, Token{}, Unit{score: float}, Aggregate{score: float}
        """
        return cls([AnnotationType(SENTENCE),
                    AnnotationType(TOKEN),
                    AnnotationType(UNIT, [(SCORE, float)]),
                    AnnotationType(AGGREGATE, [(SCORE, float)])])

    def merge(self, other):
        """
        Return a new type system holding the declarations of both.
        Two different declarations for the same name are a SchemaError.
        """
        return TypeSystem(list(self) + list(other))

    def __contains__(self, name):
        return name in self._types

    def __iter__(self):
        return iter(self._types.values())

    def __len__(self):
        return len(self._types)

    def get_type(self, name):
        "Return the declaration for the named type (SchemaError if none)"
        if name not in self._types:
            raise SchemaError("annotation type '%s' is not declared" % name)
        return self._types[name]

    def require(self, name, features=None):
        """
        Check that the named type is declared along with each of the
        given features, returning the declaration
        """
        atype = self.get_type(name)
        for feature in features or []:
            atype.kind(feature)
        return atype
