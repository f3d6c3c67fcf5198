from fbx_formats.shared.enums import PropertyType


# -------------------------------------------------------------------------------------------------
# the key-value tree every fbx file decodes into
# - an element has an id, a list of typed property values and child elements
# - geometry decoding only ever reads from this tree, it never sees raw bytes


# -------------------------------------------------------------------------------------------------
class Property:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, type, value):
		self.type = PropertyType(type)
		self.value = value

	# ---------------------------------------------------------------------------------------------
	def __repr__(self):
		return F"Property({self.type.value!r}, {self.value!r})"

	# ---------------------------------------------------------------------------------------------
	def to_int(self):
		return int(self.value)

	# ---------------------------------------------------------------------------------------------
	def to_float(self):
		return float(self.value)

	# ---------------------------------------------------------------------------------------------
	def to_string(self):
		if isinstance(self.value, bytes):
			return self.value.decode('utf-8', errors='replace')
		return str(self.value)

	# ---------------------------------------------------------------------------------------------
	def to_array(self):
		if isinstance(self.value, (list, tuple)):
			return list(self.value)
		return [self.value]


# -------------------------------------------------------------------------------------------------
class Element:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, id, properties=None, children=None, version=0):
		self.id = id
		self.version = version # only set on the root of a tokenized file
		self.properties = properties if properties is not None else []
		self.children = children if children is not None else []

	# ---------------------------------------------------------------------------------------------
	def __repr__(self):
		return F"Element({self.id!r}, properties={len(self.properties)}, children={len(self.children)})"

	# ---------------------------------------------------------------------------------------------
	def get_property(self, index):
		if 0 <= index < len(self.properties):
			return self.properties[index]
		return None

	# ---------------------------------------------------------------------------------------------
	def find_child(self, name):
		return next((child for child in self.children if child.id == name), None)

	# ---------------------------------------------------------------------------------------------
	def find_children(self, name):
		return [child for child in self.children if child.id == name]

	# ---------------------------------------------------------------------------------------------
	def find_child_property(self, name):
		child = self.find_child(name)
		if child is None:
			return []
		return child.properties
