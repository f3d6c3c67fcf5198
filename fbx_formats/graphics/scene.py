from pathlib import Path
from fbx_formats.document.tokenizer import tokenize
from fbx_formats.error import print_debug_message
from fbx_formats.utils.tree import find_elements
from . geometry import DEFAULT_PARAMS, Geometry

# -------------------------------------------------------------------------------------------------
# scene is a container for the geometry objects of one fbx file
# - only `Objects/Geometry` elements of class `Mesh` are decoded
# - node hierarchy, skins and materials are not resolved, `Geometry.skin` is left to the caller


# -------------------------------------------------------------------------------------------------
class Scene:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, params={}):
		self.params = DEFAULT_PARAMS | params
		self.version = 0
		self.root = None
		self.geometries = []

	# ---------------------------------------------------------------------------------------------
	def load(self, data):
		self.root = tokenize(data)
		self.version = self.root.version

		elements = find_elements(self.root, 'Objects/Geometry')

		if self.params['debug']:
			print_debug_message(F"Loading {len(elements)} geometry objects (version {self.version})")

		for element in elements:
			# Geometry: id, "name\x00\x01Geometry", "Mesh"
			kind = element.get_property(2)
			if kind is not None and kind.to_string() != 'Mesh':
				continue
			self.geometries.append(Geometry.from_element(element, self.params))

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_bytes(cls, data, params={}):
		scene = cls(params)
		scene.load(data)
		return scene

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_file(cls, filename, params={}):
		pathname = Path(filename).resolve()

		if not pathname.exists():
			raise FileNotFoundError(F"File does not exist... '{pathname}'")

		with open(pathname, 'rb') as inp:
			return cls.from_bytes(inp.read(), params)

	# ---------------------------------------------------------------------------------------------
	def find_geometry(self, name):
		return next((g for g in self.geometries if g.name == name), None)
