from fbx_formats.error import (
	InvalidLayerData,
	UnsupportedMapping,
	print_warning_message
)
from fbx_formats.shared.enums import MappingMode, ReferenceMode

# -------------------------------------------------------------------------------------------------
# attribute layers (`LayerElement*`) store values in one of three layouts and may indirect them
# through an index array. every layer is expanded into polygon-vertex order first (splat) and
# then reordered into triangulated vertex order (remap).

# --- notes ---------------------------------------------------------------------------------------
# - `ByVertice` is what fbx sdk exporters write, `ByVertex` shows up in some third party files
# - uv index arrays from some exporters contain -1 for unmapped corners, these are rejected


# -------------------------------------------------------------------------------------------------
UVS_MAX = 4


# -------------------------------------------------------------------------------------------------
class LayerData:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, values, indices, mapping):
		self.values = values
		self.indices = indices
		self.mapping = mapping


# -------------------------------------------------------------------------------------------------
def decode_index(index):
	return (-index - 1) if index < 0 else index


# -------------------------------------------------------------------------------------------------
def group_values(values, size):
	"""
	Groups a flat array of floats into tuples of `size` components.

	Args:
	- values (list): The flat value array.
	- size (int): Components per value, 1 keeps the values as plain scalars.

	Returns:
	- list: The grouped values.
	"""
	if size == 1:
		return list(values)
	if len(values) % size != 0:
		raise InvalidLayerData(F"Expected a multiple of {size} values, got {len(values)}")
	return [tuple(values[i:i + size]) for i in range(0, len(values), size)]


# -------------------------------------------------------------------------------------------------
def lookup(values, indices, key):
	"""
	Resolves one layer record, going through the index array when there is one.
	"""
	if indices is not None:
		if key >= len(indices):
			raise InvalidLayerData(F"Layer index array too short, no entry for {key}")
		key = indices[key]
	if not (0 <= key < len(values)):
		raise InvalidLayerData(F"Layer value index {key} out of bounds (size {len(values)})")
	return values[key]


# -------------------------------------------------------------------------------------------------
def splat(mapping, values, indices, original_indices):
	"""
	Expands a layer into one value per polygon-vertex, in the order of the polygon index stream.

	Args:
	- mapping (MappingMode): How the values relate to the mesh.
	- values (list): The layer values.
	- indices (list): The layer index array, or None for direct layers.
	- original_indices (list): The raw `PolygonVertexIndex` stream.

	Returns:
	- list: One value per stream entry.
	"""
	if mapping is MappingMode.BY_POLYGON_VERTEX:
		return [lookup(values, indices, k) for k in range(len(original_indices))]

	if mapping is MappingMode.BY_POLYGON:
		out = []
		polygon = 0
		for index in original_indices:
			out.append(lookup(values, indices, polygon))
			if index < 0:
				polygon += 1
		return out

	if mapping is MappingMode.BY_VERTEX:
		return [lookup(values, indices, decode_index(index)) for index in original_indices]

	raise UnsupportedMapping(mapping.value)


# -------------------------------------------------------------------------------------------------
def remap(values, to_old_indices):
	"""
	Reorders polygon-vertex ordered values into triangulated vertex order.
	"""
	size = len(values)
	out = []
	for old in to_old_indices:
		if not (0 <= old < size):
			raise InvalidLayerData(F"Remap index {old} out of bounds (size {size})")
		out.append(values[old])
	return out


# -------------------------------------------------------------------------------------------------
def read_mapping(element):
	mapping = element.find_child_property('MappingInformationType')
	reference = element.find_child_property('ReferenceInformationType')
	if not mapping or not reference:
		raise InvalidLayerData(F"Invalid {element.id}, missing mapping or reference information")
	return (
		MappingMode.from_string(mapping[0].to_string()),
		ReferenceMode.from_string(reference[0].to_string())
	)


# -------------------------------------------------------------------------------------------------
def read_layer(element, name, index_name, size):
	"""
	Reads the raw values, indices and mapping of a `LayerElement*` node.

	Args:
	- element (Element): The layer element.
	- name (str): Child holding the values, eg. `Normals`.
	- index_name (str): Child holding the indices, eg. `NormalsIndex`.
	- size (int): Components per value.

	Returns:
	- LayerData: The raw layer.
	"""
	data = element.find_child_property(name)
	if not data:
		raise InvalidLayerData(F"Invalid {element.id}, missing '{name}'")

	mapping, reference = read_mapping(element)

	indices = None
	if reference is ReferenceMode.INDEX_TO_DIRECT:
		index_data = element.find_child_property(index_name)
		if not index_data:
			raise InvalidLayerData(F"Invalid {element.id}, missing '{index_name}'")
		indices = [int(i) for i in index_data[0].to_array()]

	values = group_values(data[0].to_array(), size)
	return LayerData(values, indices, mapping)


# -------------------------------------------------------------------------------------------------
def resolve_layer(layer, original_indices, to_old_indices, identity):
	"""
	Turns a raw layer into one value per triangulated vertex.

	Returns:
	- list: The resolved values, or None when the layer holds no values.
	"""
	if not layer.values:
		return None

	if layer.mapping is MappingMode.BY_VERTEX:
		per_control_point = {}
		for control_point, slots in identity:
			if slots:
				per_control_point[control_point] = lookup(layer.values, layer.indices, control_point)
		return identity.broadcast(per_control_point)

	return remap(splat(layer.mapping, layer.values, layer.indices, original_indices), to_old_indices)


# -------------------------------------------------------------------------------------------------
def resolve_vertex_layer(element, name, index_name, size, geometry):
	layer = read_layer(element, name, index_name, size)
	return resolve_layer(layer, geometry.original_indices, geometry.to_old_indices, geometry.to_new_vertices)


# -------------------------------------------------------------------------------------------------
def resolve_normals(element, geometry):
	layer_element = element.find_child('LayerElementNormal')
	if layer_element is None:
		return None
	return resolve_vertex_layer(layer_element, 'Normals', 'NormalsIndex', 3, geometry)


# -------------------------------------------------------------------------------------------------
def resolve_tangents(element, geometry):
	layer_element = element.find_child('LayerElementTangents')
	if layer_element is None:
		layer_element = element.find_child('LayerElementTangent')
	if layer_element is None:
		return None
	if layer_element.find_child('Tangents') is not None:
		return resolve_vertex_layer(layer_element, 'Tangents', 'TangentsIndex', 3, geometry)
	return resolve_vertex_layer(layer_element, 'Tangent', 'TangentIndex', 3, geometry)


# -------------------------------------------------------------------------------------------------
def resolve_colors(element, geometry):
	layer_element = element.find_child('LayerElementColor')
	if layer_element is None:
		return None
	return resolve_vertex_layer(layer_element, 'Colors', 'ColorIndex', 4, geometry)


# -------------------------------------------------------------------------------------------------
def resolve_uvs(element, geometry, strict=False):
	"""
	Resolves every `LayerElementUV` node into its channel.

	Returns:
	- list: `UVS_MAX` entries, None for channels the mesh does not have.
	"""
	uvs = [None] * UVS_MAX
	for layer_element in element.find_children('LayerElementUV'):
		channel = 0
		if layer_element.properties:
			channel = layer_element.properties[0].to_int()
		if not (0 <= channel < UVS_MAX):
			if strict:
				raise InvalidLayerData(F"UV channel {channel} out of range")
			print_warning_message(F"Ignoring UV channel {channel}, only {UVS_MAX} channels are supported")
			continue
		uvs[channel] = resolve_vertex_layer(layer_element, 'UV', 'UVIndex', 2, geometry)
	return uvs


# -------------------------------------------------------------------------------------------------
def resolve_materials(element, polygons):
	"""
	Resolves the `LayerElementMaterial` node into one material id per output triangle.

	Returns:
	- list: The material ids, or None when the mesh uses a single material.
	"""
	layer_element = element.find_child('LayerElementMaterial')
	if layer_element is None:
		return None

	mapping, reference = read_mapping(layer_element)

	if mapping is MappingMode.ALL_SAME:
		return None

	if mapping is not MappingMode.BY_POLYGON or reference is not ReferenceMode.INDEX_TO_DIRECT:
		raise UnsupportedMapping(F"{mapping.value}/{reference.value}")

	data = layer_element.find_child_property('Materials')
	if not data:
		raise InvalidLayerData(F"Invalid {layer_element.id}, missing 'Materials'")
	ids = [int(i) for i in data[0].to_array()]
	if len(ids) < len(polygons):
		raise InvalidLayerData(F"Expected {len(polygons)} material ids, got {len(ids)}")

	materials = []
	for polygon, material in zip(polygons, ids):
		materials.extend([material] * (len(polygon) - 2))
	return materials
