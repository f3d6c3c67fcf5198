from colorama import Fore, Style

# --- todo ----------------------------------------------------------------------------------------
# - include the geometry name in layer errors


# -------------------------------------------------------------------------------------------------
def print_warning_message(message):
	print(F"{Fore.YELLOW}WARNING: {message}{Style.RESET_ALL}")


# -------------------------------------------------------------------------------------------------
def print_debug_message(message):
	print(F"{Fore.CYAN}DEBUG: {Style.RESET_ALL}{message}")


# -------------------------------------------------------------------------------------------------
class InvalidFormatError(Exception):
	pass


# -------------------------------------------------------------------------------------------------
class GeometryError(Exception):
	pass


# -------------------------------------------------------------------------------------------------
class MissingRequiredField(GeometryError):

	# ---------------------------------------------------------------------------------------------
	def __init__(self, field):
		super().__init__(F"Geometry is missing required field '{field}'")
		self.field = field


# -------------------------------------------------------------------------------------------------
class MalformedIndexData(GeometryError):
	pass


# -------------------------------------------------------------------------------------------------
class InvalidLayerData(GeometryError):
	pass


# -------------------------------------------------------------------------------------------------
class UnsupportedMapping(GeometryError):

	# ---------------------------------------------------------------------------------------------
	def __init__(self, mapping):
		super().__init__(F"Mapping not supported... '{mapping}'")
		self.mapping = mapping
