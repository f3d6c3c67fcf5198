from enum import Enum
from fbx_formats.error import InvalidLayerData, UnsupportedMapping


# -------------------------------------------------------------------------------------------------
class MappingMode(Enum):
	BY_POLYGON_VERTEX = 'ByPolygonVertex'
	BY_POLYGON = 'ByPolygon'
	BY_VERTEX = 'ByVertex'
	ALL_SAME = 'AllSame'

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_string(cls, value):
		if value == 'ByVertice': # most exporters write this spelling
			return cls.BY_VERTEX
		for mode in cls:
			if mode.value == value:
				return mode
		raise UnsupportedMapping(value)


# -------------------------------------------------------------------------------------------------
class ReferenceMode(Enum):
	DIRECT = 'Direct'
	INDEX_TO_DIRECT = 'IndexToDirect'

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_string(cls, value):
		if value in ('IndexToDirect', 'Index'):
			return cls.INDEX_TO_DIRECT
		if value == 'Direct':
			return cls.DIRECT
		raise InvalidLayerData(F"Unknown reference mode... '{value}'")


# -------------------------------------------------------------------------------------------------
class PropertyType(Enum):
	# Scalars
	STRING = 'S'
	RAW = 'R'
	INT16 = 'Y'
	BOOL = 'C'
	INT32 = 'I'
	FLOAT = 'F'
	DOUBLE = 'D'
	INT64 = 'L'
	# Arrays
	ARRAY_BOOL = 'b'
	ARRAY_FLOAT = 'f'
	ARRAY_DOUBLE = 'd'
	ARRAY_INT64 = 'l'
	ARRAY_INT32 = 'i'

	# ---------------------------------------------------------------------------------------------
	def is_array(self):
		return self.value.islower()
