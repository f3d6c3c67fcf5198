# -------------------------------------------------------------------------------------------------
# path lookups over the element tree, eg. `Objects/Geometry` or `Objects/Geometry/Vertices`


# -------------------------------------------------------------------------------------------------
def split_path(path):
	return [name for name in path.split('/') if name]


# -------------------------------------------------------------------------------------------------
def find_element(root, path):
	"""
	Follows the first matching child at every step of a `/` separated path.

	Args:
	- root (Element): The element to start from.
	- path (str): Child ids separated by `/`.

	Returns:
	- Element: The element at the end of the path, or None when a step has no match.
	"""
	element = root
	for name in split_path(path):
		element = element.find_child(name)
		if element is None:
			return None
	return element


# -------------------------------------------------------------------------------------------------
def find_elements(root, path):
	"""
	Collects every element matching the path, branching on repeated ids at each step.
	"""
	elements = [root]
	for name in split_path(path):
		elements = [child for element in elements for child in element.find_children(name)]
	return elements
