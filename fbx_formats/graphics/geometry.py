from fbx_formats.error import (
	MalformedIndexData,
	MissingRequiredField,
	print_debug_message
)
from . layers import (
	UVS_MAX,
	decode_index,
	group_values,
	resolve_colors,
	resolve_materials,
	resolve_normals,
	resolve_tangents,
	resolve_uvs
)

# -------------------------------------------------------------------------------------------------
# geometry is the triangulated mesh of one `Geometry: ..., "Mesh"` object
# - `Vertices` holds the control points
# - `PolygonVertexIndex` lists polygons, the last index of a polygon is stored as `-index - 1`
# - polygons are fan triangulated from their first vertex, non-convex polygons come out wrong
#   but the output matches what other fbx importers produce


# -------------------------------------------------------------------------------------------------
DEFAULT_PARAMS = {
	'debug': False,
	'strict_uv_channels': False,
}


# -------------------------------------------------------------------------------------------------
def decode_polygons(indices):
	"""
	Splits the raw polygon index stream into polygons of control point indices.

	Args:
	- indices (list): The raw `PolygonVertexIndex` stream.

	Returns:
	- list: One list of control point indices per polygon.
	"""
	if not indices:
		raise MalformedIndexData('Polygon index stream is empty')

	polygons = []
	polygon = []
	for index in indices:
		polygon.append(decode_index(index))
		if index < 0:
			if len(polygon) < 3:
				raise MalformedIndexData(F"Polygon {len(polygons)} has only {len(polygon)} vertices")
			polygons.append(polygon)
			polygon = []

	if polygon:
		raise MalformedIndexData('Polygon index stream does not end on a polygon boundary')

	return polygons


# -------------------------------------------------------------------------------------------------
def triangulate(indices):
	"""
	Fan triangulates the raw polygon index stream.

	Args:
	- indices (list): The raw `PolygonVertexIndex` stream.

	Returns:
	- tuple: (to_old_vertices, to_old_indices) where `to_old_vertices` holds the control point
	  and `to_old_indices` the stream position each triangulated vertex was made from.
	"""
	to_old_vertices = []
	to_old_indices = []
	in_polygon = 0
	for i, index in enumerate(indices):
		if in_polygon <= 2:
			to_old_vertices.append(decode_index(index))
			to_old_indices.append(i)
		else:
			for old in (i - in_polygon, i - 1, i):
				to_old_vertices.append(decode_index(indices[old]))
				to_old_indices.append(old)
		in_polygon += 1
		if index < 0:
			in_polygon = 0
	return to_old_vertices, to_old_indices


# -------------------------------------------------------------------------------------------------
class VertexIdentity:
	"""
	Maps every control point to the triangulated vertices made from it.
	"""

	# ---------------------------------------------------------------------------------------------
	def __init__(self, num_control_points):
		self.to_new = [[] for _ in range(num_control_points)]
		self.num_slots = 0

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_slots(cls, to_old_vertices, num_control_points):
		identity = cls(num_control_points)
		for slot, control_point in enumerate(to_old_vertices):
			if not (0 <= control_point < num_control_points):
				raise MalformedIndexData(F"Control point {control_point} out of bounds (count {num_control_points})")
			identity.to_new[control_point].append(slot)
		identity.num_slots = len(to_old_vertices)
		return identity

	# ---------------------------------------------------------------------------------------------
	def __len__(self):
		return len(self.to_new)

	# ---------------------------------------------------------------------------------------------
	def __iter__(self):
		return iter(enumerate(self.to_new))

	# ---------------------------------------------------------------------------------------------
	def slots(self, control_point):
		return self.to_new[control_point]

	# ---------------------------------------------------------------------------------------------
	def broadcast(self, values):
		out = [None] * self.num_slots
		for control_point, slots in enumerate(self.to_new):
			if not slots:
				continue
			value = values[control_point]
			for slot in slots:
				out[slot] = value
		return out


# -------------------------------------------------------------------------------------------------
class Geometry:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, params={}):
		self.params = DEFAULT_PARAMS | params

		self.id = 0
		self.name = ''
		self.skin = None # owned by the scene

		self.control_points = []
		self.original_indices = []
		self.positions = []
		self.normals = None
		self.tangents = None
		self.colors = None
		self.uvs = [None] * UVS_MAX
		self.materials = None
		self.faces = []

		self.to_old_vertices = []
		self.to_old_indices = []
		self.to_new_vertices = VertexIdentity(0)

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_element(cls, element, params={}):
		geometry = cls(params)
		debug = geometry.params['debug']

		if len(element.properties) > 0:
			geometry.id = element.properties[0].value
		if len(element.properties) > 1:
			geometry.name = element.properties[1].to_string().split('\x00\x01')[0]

		vertices = element.find_child_property('Vertices')
		if not vertices:
			raise MissingRequiredField('Vertices')
		polygons = element.find_child_property('PolygonVertexIndex')
		if not polygons:
			raise MissingRequiredField('PolygonVertexIndex')

		geometry.control_points = group_values(vertices[0].to_array(), 3)
		geometry.original_indices = [int(i) for i in polygons[0].to_array()]

		geometry.faces = decode_polygons(geometry.original_indices)
		geometry.to_old_vertices, geometry.to_old_indices = triangulate(geometry.original_indices)
		geometry.to_new_vertices = VertexIdentity.from_slots(geometry.to_old_vertices, len(geometry.control_points))
		geometry.positions = [geometry.control_points[i] for i in geometry.to_old_vertices]

		if debug:
			print_debug_message(F"Geometry '{geometry.name}' has {len(geometry.faces)} polygons, {geometry.num_triangles()} triangles")

		geometry.materials = resolve_materials(element, geometry.faces)
		geometry.uvs = resolve_uvs(element, geometry, strict=geometry.params['strict_uv_channels'])
		geometry.tangents = resolve_tangents(element, geometry)
		geometry.colors = resolve_colors(element, geometry)
		geometry.normals = resolve_normals(element, geometry)

		return geometry

	# ---------------------------------------------------------------------------------------------
	def num_vertices(self):
		return len(self.positions)

	# ---------------------------------------------------------------------------------------------
	def num_triangles(self):
		return len(self.positions) // 3

	# ---------------------------------------------------------------------------------------------
	def get_uvs(self, channel=0):
		if not (0 <= channel < UVS_MAX):
			return None
		return self.uvs[channel]

	# ---------------------------------------------------------------------------------------------
	def dump(self, prefix=''):
		"""
		Returns a human readable summary of every populated array, for diagnostics only.
		"""
		lines = [F"{prefix}Geometry: {self.name}"]

		def dump_array(label, values):
			if values:
				lines.append(F"{prefix}{label}: " + ', '.join(str(v) for v in values))

		dump_array('Verts', self.positions)
		dump_array('Norms', self.normals)
		dump_array('Tangents', self.tangents)
		dump_array('Materials', self.materials)
		dump_array('Colors', self.colors)
		dump_array('Faces', self.faces)
		for channel, uvs in enumerate(self.uvs):
			dump_array(F"UVs{channel}", uvs)

		return '\n'.join(lines) + '\n'

	# ---------------------------------------------------------------------------------------------
	def __str__(self):
		return self.dump()
