import zlib
from fbx_formats.error import InvalidFormatError
from fbx_formats.shared.enums import PropertyType
from fbx_formats.utils.reader import BinaryReader
from . element import Element, Property

# -------------------------------------------------------------------------------------------------
# binary fbx layout:
# - 27 byte header, magic + 2 reserved bytes + uint32 version
# - nested element records, each list closed by a null record
# - offsets and counts are uint64 from version 7500 onwards
# - footer after the top level null record is ignored

# @todo: ascii fbx files


# -------------------------------------------------------------------------------------------------
FBX_MAGIC = b'Kaydara FBX Binary  \x00'
FBX_HEADER_SIZE = 27
FBX_VERSION_WIDE_OFFSETS = 7500

ARRAY_CODES = {
	PropertyType.ARRAY_BOOL: '?',
	PropertyType.ARRAY_FLOAT: 'f',
	PropertyType.ARRAY_DOUBLE: 'd',
	PropertyType.ARRAY_INT64: 'q',
	PropertyType.ARRAY_INT32: 'i',
}


# -------------------------------------------------------------------------------------------------
def is_binary_fbx(data):
	return data[:len(FBX_MAGIC)] == FBX_MAGIC


# -------------------------------------------------------------------------------------------------
def read_property_type(br):
	code = br.read_string(1)
	try:
		return PropertyType(code)
	except ValueError:
		raise InvalidFormatError(F"Unknown property type '{code}' at offset {br.tell() - 1}")


# -------------------------------------------------------------------------------------------------
def read_array_property(br, type):
	count = br.read_uint32()
	encoding = br.read_uint32()
	length = br.read_uint32()
	if encoding == 0:
		return br.read_array(ARRAY_CODES[type], count)
	if encoding == 1:
		try:
			raw = zlib.decompress(br.read_bytes(length))
		except zlib.error as e:
			raise InvalidFormatError(F"Failed to inflate array property... {e}")
		return BinaryReader(raw).read_array(ARRAY_CODES[type], count)
	raise InvalidFormatError(F"Unknown array encoding {encoding}")


# -------------------------------------------------------------------------------------------------
def read_property(br):
	type = read_property_type(br)

	if type is PropertyType.STRING:
		value = br.read_string(br.read_uint32())
	elif type is PropertyType.RAW:
		value = br.read_bytes(br.read_uint32())
	elif type is PropertyType.INT16:
		value = br.read_int16()
	elif type is PropertyType.BOOL:
		value = br.read_bool()
	elif type is PropertyType.INT32:
		value = br.read_int32()
	elif type is PropertyType.FLOAT:
		value = br.read_float()
	elif type is PropertyType.DOUBLE:
		value = br.read_double()
	elif type is PropertyType.INT64:
		value = br.read_int64()
	else:
		value = read_array_property(br, type)

	return Property(type, value)


# -------------------------------------------------------------------------------------------------
def read_element(br, version):
	"""
	Reads one element record and its children.

	Returns:
	- Element: the element, or None when the null record closing a child list was read.
	"""
	wide = version >= FBX_VERSION_WIDE_OFFSETS
	read_offset = br.read_uint64 if wide else br.read_uint32
	sentinel_length = 25 if wide else 13

	end_offset = read_offset()
	num_properties = read_offset()
	read_offset() # property list length
	name_length = br.read_uint8()

	if end_offset == 0:
		return None

	element = Element(br.read_string(name_length))
	for _ in range(num_properties):
		element.properties.append(read_property(br))

	if br.tell() < end_offset:
		while br.tell() < end_offset - sentinel_length:
			child = read_element(br, version)
			if child is None:
				raise InvalidFormatError(F"Unexpected null record inside '{element.id}'")
			element.children.append(child)
		br.read_bytes(sentinel_length)

	if br.tell() != end_offset:
		raise InvalidFormatError(F"Element '{element.id}' does not end at offset {end_offset}")

	return element


# -------------------------------------------------------------------------------------------------
def tokenize(data):
	"""
	Tokenizes a binary fbx file into a tree of elements.

	Args:
	- data (bytes): The whole file.

	Returns:
	- Element: A nameless root element holding the top level elements.
	"""
	if not is_binary_fbx(data):
		raise InvalidFormatError('Not a binary fbx file...')

	br = BinaryReader(data)
	br.seek(len(FBX_MAGIC) + 2)
	version = br.read_uint32()

	root = Element('', version=version)
	end = len(data)
	while br.tell() < end:
		child = read_element(br, version)
		if child is None:
			break
		root.children.append(child)

	return root
