import pytest
from fbx_formats.document.element import Property
from fbx_formats.error import InvalidLayerData, UnsupportedMapping
from fbx_formats.graphics.geometry import Geometry, VertexIdentity, triangulate
from fbx_formats.graphics.layers import (
	group_values,
	read_layer,
	remap,
	resolve_layer,
	splat
)
from fbx_formats.shared.enums import MappingMode, ReferenceMode
from fbxbuild import node, layer, mesh, QUADS_VERTICES, QUADS_INDICES

TO_OLD_INDICES = [0, 1, 2, 0, 2, 3, 4, 5, 6, 4, 6, 7]


# -------------------------------------------------------------------------------------------------
def test_mapping_mode():
	assert MappingMode.from_string('ByPolygonVertex') is MappingMode.BY_POLYGON_VERTEX
	assert MappingMode.from_string('ByPolygon') is MappingMode.BY_POLYGON
	assert MappingMode.from_string('ByVertice') is MappingMode.BY_VERTEX
	assert MappingMode.from_string('ByVertex') is MappingMode.BY_VERTEX
	assert MappingMode.from_string('AllSame') is MappingMode.ALL_SAME
	with pytest.raises(UnsupportedMapping):
		MappingMode.from_string('ByEdge')


# -------------------------------------------------------------------------------------------------
def test_reference_mode():
	assert ReferenceMode.from_string('Direct') is ReferenceMode.DIRECT
	assert ReferenceMode.from_string('IndexToDirect') is ReferenceMode.INDEX_TO_DIRECT
	assert ReferenceMode.from_string('Index') is ReferenceMode.INDEX_TO_DIRECT
	with pytest.raises(InvalidLayerData):
		ReferenceMode.from_string('Indirect')


# -------------------------------------------------------------------------------------------------
def test_group_values():
	assert group_values([1.0, 2.0, 3.0, 4.0], 2) == [(1.0, 2.0), (3.0, 4.0)]
	assert group_values([1.0, 2.0], 1) == [1.0, 2.0]
	with pytest.raises(InvalidLayerData):
		group_values([1.0, 2.0, 3.0], 2)


# -------------------------------------------------------------------------------------------------
def test_splat_remap_by_polygon_vertex():
	values = list(range(len(QUADS_INDICES)))
	expanded = splat(MappingMode.BY_POLYGON_VERTEX, values, None, QUADS_INDICES)
	assert expanded == values
	assert remap(expanded, TO_OLD_INDICES) == TO_OLD_INDICES


# -------------------------------------------------------------------------------------------------
def test_splat_by_polygon_vertex_indexed():
	expanded = splat(MappingMode.BY_POLYGON_VERTEX, ['a', 'b'], [0, 1, 1, 0, 0, 0, 1, 1], QUADS_INDICES)
	assert expanded == ['a', 'b', 'b', 'a', 'a', 'a', 'b', 'b']


# -------------------------------------------------------------------------------------------------
def test_splat_by_polygon():
	assert splat(MappingMode.BY_POLYGON, ['a', 'b'], None, QUADS_INDICES) == ['a'] * 4 + ['b'] * 4
	assert splat(MappingMode.BY_POLYGON, ['x', 'y'], [1, 0], QUADS_INDICES) == ['y'] * 4 + ['x'] * 4


# -------------------------------------------------------------------------------------------------
def test_splat_by_vertex():
	values = ['v0', 'v1', 'v2', 'v3', 'v4', 'v5']
	expanded = splat(MappingMode.BY_VERTEX, values, None, QUADS_INDICES)
	assert expanded == ['v0', 'v1', 'v2', 'v3', 'v1', 'v4', 'v5', 'v2']
	indexed = splat(MappingMode.BY_VERTEX, ['p', 'q'], [0, 1, 0, 1, 0, 1], QUADS_INDICES)
	assert indexed == ['p', 'q', 'p', 'q', 'q', 'p', 'q', 'p']


# -------------------------------------------------------------------------------------------------
def test_splat_errors():
	# not enough values for every polygon vertex
	with pytest.raises(InvalidLayerData):
		splat(MappingMode.BY_POLYGON_VERTEX, [1, 2, 3], None, QUADS_INDICES)
	# index array too short
	with pytest.raises(InvalidLayerData):
		splat(MappingMode.BY_POLYGON, ['a', 'b'], [0], QUADS_INDICES)
	# index pointing outside the values
	with pytest.raises(InvalidLayerData):
		splat(MappingMode.BY_POLYGON_VERTEX, ['a'], [0, 0, 0, 0, 0, 0, 0, 1], QUADS_INDICES)
	with pytest.raises(InvalidLayerData):
		splat(MappingMode.BY_POLYGON_VERTEX, ['a'], [-1] * 8, QUADS_INDICES)
	with pytest.raises(UnsupportedMapping):
		splat(MappingMode.ALL_SAME, ['a'], None, QUADS_INDICES)


# -------------------------------------------------------------------------------------------------
def test_remap_out_of_bounds():
	with pytest.raises(InvalidLayerData):
		remap(['a', 'b'], [0, 1, 2])


# -------------------------------------------------------------------------------------------------
def test_resolve_by_vertex_matches_splat_remap():
	to_old_vertices, to_old_indices = triangulate(QUADS_INDICES)
	identity = VertexIdentity.from_slots(to_old_vertices, 6)
	values = [(float(i), 0.0, 1.0) for i in range(6)]
	element = layer('LayerElementNormal', 'ByVertice', 'Direct', 'Normals', [c for v in values for c in v])
	resolved = resolve_layer(read_layer(element, 'Normals', 'NormalsIndex', 3), QUADS_INDICES, to_old_indices, identity)
	expected = remap(splat(MappingMode.BY_VERTEX, values, None, QUADS_INDICES), to_old_indices)
	assert resolved == expected
	assert resolved == [values[c] for c in to_old_vertices]


# -------------------------------------------------------------------------------------------------
def test_read_layer_errors():
	# IndexToDirect without the index array
	element = layer('LayerElementUV', 'ByPolygonVertex', 'IndexToDirect', 'UV', [0.0, 0.0])
	with pytest.raises(InvalidLayerData):
		read_layer(element, 'UV', 'UVIndex', 2)
	# no values at all
	element = node('LayerElementUV', children=[
		node('MappingInformationType', Property('S', 'ByPolygonVertex')),
		node('ReferenceInformationType', Property('S', 'Direct')),
	])
	with pytest.raises(InvalidLayerData):
		read_layer(element, 'UV', 'UVIndex', 2)
	# no mapping information
	element = node('LayerElementUV', children=[
		node('ReferenceInformationType', Property('S', 'Direct')),
		node('UV', Property('d', [0.0, 0.0])),
	])
	with pytest.raises(InvalidLayerData):
		read_layer(element, 'UV', 'UVIndex', 2)


# -------------------------------------------------------------------------------------------------
def test_empty_layer_is_absent():
	geometry = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementNormal', 'ByPolygonVertex', 'Direct', 'Normals', []),
	]))
	assert geometry.normals is None


# -------------------------------------------------------------------------------------------------
def test_normals_by_polygon_vertex():
	normals = [c for k in range(8) for c in (float(k), 0.0, 1.0)]
	geometry = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementNormal', 'ByPolygonVertex', 'Direct', 'Normals', normals),
	]))
	assert len(geometry.normals) == geometry.num_vertices()
	assert [n[0] for n in geometry.normals] == [float(k) for k in TO_OLD_INDICES]


# -------------------------------------------------------------------------------------------------
def test_normals_by_polygon():
	geometry = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementNormal', 'ByPolygon', 'Direct', 'Normals', [0.0, 0.0, 1.0, 0.0, 0.0, -1.0]),
	]))
	assert geometry.normals == [(0.0, 0.0, 1.0)] * 6 + [(0.0, 0.0, -1.0)] * 6


# -------------------------------------------------------------------------------------------------
def test_tangents_plural_and_singular():
	tangents = [1.0, 0.0, 0.0] * 8
	plural = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementTangents', 'ByPolygonVertex', 'Direct', 'Tangents', tangents),
	]))
	singular = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementTangent', 'ByPolygonVertex', 'Direct', 'Tangent', tangents),
	]))
	mixed = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementTangents', 'ByPolygonVertex', 'Direct', 'Tangent', tangents),
	]))
	assert plural.tangents == singular.tangents == mixed.tangents == [(1.0, 0.0, 0.0)] * 12


# -------------------------------------------------------------------------------------------------
def test_colors_index_to_direct():
	colors = [1.0, 0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 1.0]
	geometry = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementColor', 'ByPolygonVertex', 'IndexToDirect', 'Colors', colors, 'ColorIndex', [0, 0, 0, 0, 1, 1, 1, 1]),
	]))
	red = (1.0, 0.0, 0.0, 1.0)
	blue = (0.0, 0.0, 1.0, 1.0)
	assert geometry.colors == [red] * 6 + [blue] * 6


# -------------------------------------------------------------------------------------------------
def test_uv_channels(capsys):
	uvs = [0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0, 1.0, 2.0, 0.0, 2.0, 1.0]
	geometry = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementUV', 'ByVertice', 'Direct', 'UV', uvs, channel=0),
		layer('LayerElementUV', 'ByPolygonVertex', 'IndexToDirect', 'UV', [0.5, 0.5], 'UVIndex', [0] * 8, channel=2),
		layer('LayerElementUV', 'ByPolygonVertex', 'Direct', 'UV', [0.0, 0.0] * 8, channel=4),
	]))
	assert geometry.get_uvs(0)[:6] == [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
	assert geometry.get_uvs(1) is None
	assert geometry.get_uvs(2) == [(0.5, 0.5)] * 12
	assert geometry.get_uvs(3) is None
	assert 'Ignoring UV channel 4' in capsys.readouterr().out


# -------------------------------------------------------------------------------------------------
def test_uv_channel_without_index_property():
	geometry = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementUV', 'ByPolygon', 'Direct', 'UV', [0.0, 0.0, 1.0, 1.0]),
	]))
	assert geometry.uvs[0] == [(0.0, 0.0)] * 6 + [(1.0, 1.0)] * 6


# -------------------------------------------------------------------------------------------------
def test_uv_channel_strict():
	element = mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementUV', 'ByPolygonVertex', 'Direct', 'UV', [0.0, 0.0] * 8, channel=-1),
	])
	with pytest.raises(InvalidLayerData):
		Geometry.from_element(element, {'strict_uv_channels': True})


# -------------------------------------------------------------------------------------------------
def material_layer(mapping, reference, materials=None):
	children = [
		node('MappingInformationType', Property('S', mapping)),
		node('ReferenceInformationType', Property('S', reference)),
	]
	if materials is not None:
		children.append(node('Materials', Property('i', materials)))
	return node('LayerElementMaterial', Property('I', 0), children=children)


# -------------------------------------------------------------------------------------------------
def test_materials_all_same():
	geometry = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		material_layer('AllSame', 'IndexToDirect', [0]),
	]))
	assert geometry.materials is None


# -------------------------------------------------------------------------------------------------
def test_materials_by_polygon():
	geometry = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		material_layer('ByPolygon', 'IndexToDirect', [5, 7]),
	]))
	assert geometry.materials == [5, 5, 7, 7]
	assert len(geometry.materials) == geometry.num_triangles()


# -------------------------------------------------------------------------------------------------
def test_materials_mixed_polygons():
	indices = [0, 1, -3, 0, 1, 2, 3, -5]
	geometry = Geometry.from_element(mesh([0.0] * 15, indices, [
		material_layer('ByPolygon', 'IndexToDirect', [2, 9]),
	]))
	assert geometry.materials == [2, 9, 9, 9]


# -------------------------------------------------------------------------------------------------
def test_materials_errors():
	with pytest.raises(InvalidLayerData):
		Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
			node('LayerElementMaterial', children=[
				node('MappingInformationType', Property('S', 'ByPolygon')),
			]),
		]))
	with pytest.raises(InvalidLayerData):
		Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
			material_layer('ByPolygon', 'IndexToDirect'),
		]))
	with pytest.raises(InvalidLayerData):
		Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
			material_layer('ByPolygon', 'IndexToDirect', [5]),
		]))
	with pytest.raises(UnsupportedMapping):
		Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
			material_layer('ByPolygonVertex', 'IndexToDirect', [0] * 8),
		]))
	with pytest.raises(UnsupportedMapping):
		Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
			material_layer('ByEdge', 'IndexToDirect', [0] * 8),
		]))


# -------------------------------------------------------------------------------------------------
def test_colors_by_vertex_index_to_direct():
	colors = [1.0, 0.0, 0.0, 1.0, 0.0, 1.0, 0.0, 1.0]
	color_index = [0, 1, 0, 1, 0, 1]
	geometry = Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
		layer('LayerElementColor', 'ByVertice', 'IndexToDirect', 'Colors', colors, 'ColorIndex', color_index),
	]))
	values = group_values(colors, 4)
	expected = remap(splat(MappingMode.BY_VERTEX, values, color_index, QUADS_INDICES), TO_OLD_INDICES)
	assert geometry.colors == expected
	assert geometry.colors == [values[color_index[c]] for c in geometry.to_old_vertices]


# -------------------------------------------------------------------------------------------------
def test_colors_by_vertex_index_out_of_range():
	colors = [1.0, 0.0, 0.0, 1.0, 0.0, 1.0, 0.0, 1.0]
	with pytest.raises(InvalidLayerData):
		Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
			layer('LayerElementColor', 'ByVertice', 'IndexToDirect', 'Colors', colors, 'ColorIndex', [0, 1, 0, 1, 0, 2]),
		]))
	# control points 3 to 5 have no index entry
	with pytest.raises(InvalidLayerData):
		Geometry.from_element(mesh(QUADS_VERTICES, QUADS_INDICES, [
			layer('LayerElementColor', 'ByVertice', 'IndexToDirect', 'Colors', colors, 'ColorIndex', [0, 1, 0]),
		]))
