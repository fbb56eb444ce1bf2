"""Tests for OBJ/MTL ingestion and attaching meshes to a scene."""

import pytest

from core.ray import Ray
from core.transform import Matrix
from core.vector import Vector3
from geometry.mesh import (
    DEFAULT_PROPERTIES,
    MeshFormatError,
    ObjReader,
    load_obj,
    parse_mtl,
)
from geometry.shapes import Triangle
from geometry.world import Scene
from materials.material import MaterialProperties

MTL = """\
# two materials
newmtl red
Ka 0.1 0.0 0.0
Kd 1.0 0.0 0.0
Ks 0.5 0.5 0.5
Ke 0.0 0.0 0.0
Ns 10
Ni 1.5
d 1.0
illum 2

newmtl glass
Kd 0.9 0.9 0.9
Tr 0.8
"""

QUAD = """\
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vn 0 0 1
usemtl red
f 1//1 2//1 3//1 4//1
"""


@pytest.fixture
def materials():
    return parse_mtl(MTL.splitlines())


class TestParseMtl:
    def test_reads_coefficients(self, materials):
        red = materials["red"]
        assert red.ka == Vector3(0.1, 0, 0)
        assert red.kd == Vector3(1, 0, 0)
        assert red.ks == Vector3(0.5, 0.5, 0.5)
        assert red.ns == 10
        assert red.ni == 1.5
        assert red.d == 1.0

    def test_transparency_sets_opacity(self, materials):
        assert materials["glass"].d == pytest.approx(0.2)

    def test_statement_before_newmtl(self):
        with pytest.raises(MeshFormatError):
            parse_mtl(["Kd 1 1 1"])

    def test_bad_number(self):
        with pytest.raises(MeshFormatError) as excinfo:
            parse_mtl(["newmtl x", "Kd 1 one 1"], source="bad.mtl")
        assert excinfo.value.line_num == 2
        assert "bad.mtl:2" in str(excinfo.value)


class TestObjReader:
    def test_quad_is_fanned_into_triangles(self, materials):
        reader = ObjReader(QUAD.splitlines(), materials=materials)
        assert len(reader.vertices) == 4
        assert len(reader.normals) == 1
        assert [f.vertex_indices for f in reader.faces] == [(0, 1, 2), (0, 2, 3)]
        assert all(f.properties is materials["red"] for f in reader.faces)

    def test_face_points(self, materials):
        reader = ObjReader(QUAD.splitlines(), materials=materials)
        assert reader.face_points()[1] == (Vector3(0, 0, 0), Vector3(1, 1, 0), Vector3(0, 1, 0))

    def test_triangles_use_file_normal(self, materials):
        lines = QUAD.replace("vn 0 0 1", "vn 0 0 -1").splitlines()
        triangles = ObjReader(lines, materials=materials).triangles()
        assert all(isinstance(t, Triangle) for t in triangles)
        assert all(t.normal == Vector3(0, 0, -1) for t in triangles)

    def test_missing_normals_fall_back_to_winding(self):
        reader = ObjReader(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1 2 3"])
        assert reader.faces[0].normal_indices is None
        assert reader.triangles()[0].normal == Vector3(0, 0, 1)

    def test_negative_indices(self):
        reader = ObjReader(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f -3 -2 -1"])
        assert reader.faces[0].vertex_indices == (0, 1, 2)

    def test_texture_coordinates_ignored(self):
        reader = ObjReader(["v 0 0 0", "v 1 0 0", "v 0 1 0", "vt 0 0", "vn 0 0 1",
                            "f 1/1/1 2/1/1 3/1/1"])
        assert reader.faces[0].normal_indices == (0, 0, 0)

    def test_unknown_material_uses_default(self):
        reader = ObjReader(["v 0 0 0", "v 1 0 0", "v 0 1 0", "usemtl nope", "f 1 2 3"])
        assert reader.faces[0].properties == DEFAULT_PROPERTIES

    def test_default_record_is_not_shared(self):
        reader = ObjReader(["v 0 0 0", "v 1 0 0", "v 0 1 0", "v 1 1 0",
                            "f 1 2 3", "usemtl nope", "f 2 4 3"])
        first, second = (face.properties for face in reader.faces)
        first.d = 0.25
        assert second.d == 1.0
        assert DEFAULT_PROPERTIES.d == 1.0

    def test_short_vertex_line(self):
        with pytest.raises(MeshFormatError) as excinfo:
            ObjReader(["v 0 0 0", "v 1 2"])
        assert excinfo.value.line_num == 2

    def test_index_out_of_range(self):
        with pytest.raises(MeshFormatError):
            ObjReader(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1 2 9"])

    def test_face_with_two_vertices(self):
        with pytest.raises(MeshFormatError):
            ObjReader(["v 0 0 0", "v 1 0 0", "f 1 2"])

    def test_center_and_transform_about_center(self, materials):
        reader = ObjReader(QUAD.splitlines(), materials=materials)
        assert reader.center().is_close(Vector3(0.5, 0.5, 0))

        reader.apply_transform(Matrix.scaling(2.0))
        assert reader.center().is_close(Vector3(0.5, 0.5, 0))
        assert reader.vertices[0].is_close(Vector3(-0.5, -0.5, 0))
        assert reader.triangles()[0].normal.is_close(Vector3(0, 0, 1))

    def test_zero_normal_survives_transform(self):
        reader = ObjReader(["v 0 0 0", "v 1 0 0", "v 0 1 0", "vn 0 0 0",
                            "f 1//1 2//1 3//1"])
        reader.apply_transform(Matrix.translation(Vector3(0, 0, -3)))
        triangle = reader.triangles()[0]
        assert triangle.normal == Vector3(0, 0, 0)

        scene = Scene()
        reader.attach_materials(scene)
        material, _ = scene.nearest(Ray(Vector3(0.25, 0.25, 0), Vector3(0, 0, -1)))
        assert material is None


class TestAttachMaterials:
    def test_one_material_per_face(self, materials):
        scene = Scene()
        attached = ObjReader(QUAD.splitlines(), materials=materials).attach_materials(scene)
        assert len(attached) == 2
        assert len(scene.materials) == 2
        assert len(scene.shapes) == 2

        material = attached[0]
        assert material.color.is_close(Vector3(1, 0, 0))
        assert material.ka == Vector3(0.1, 0, 0)
        assert material.eta == 10
        assert material.ior == 1.5
        assert material.kt == 0.0

    def test_mesh_is_hit(self, materials):
        scene = Scene()
        ObjReader(QUAD.splitlines(), materials=materials).attach_materials(scene)
        material, t = scene.nearest(Ray(Vector3(0.75, 0.5, 2), Vector3(0, 0, -1)))
        assert material is not None
        assert t == pytest.approx(2.0)

    def test_degenerate_faces_skipped(self):
        scene = Scene()
        reader = ObjReader(["v 0 0 0", "v 1 0 0", "v 2 0 0", "v 0 1 0",
                            "f 1 2 3", "f 1 2 4"])
        attached = reader.attach_materials(scene)
        assert len(reader.faces) == 2
        assert len(attached) == 1


class TestLoadObj:
    def test_from_file_with_library(self, tmp_path):
        (tmp_path / "quad.mtl").write_text(MTL)
        (tmp_path / "quad.obj").write_text("mtllib quad.mtl\n" + QUAD)

        reader = ObjReader.from_file(tmp_path / "quad.obj")
        assert set(reader.materials) == {"red", "glass"}
        assert reader.faces[0].properties.kd == Vector3(1, 0, 0)

    def test_library_falls_back_to_obj_name(self, tmp_path):
        (tmp_path / "model.mtl").write_text(MTL)
        (tmp_path / "model.obj").write_text("mtllib missing.mtl\n" + QUAD)

        reader = ObjReader.from_file(tmp_path / "model.obj")
        assert "red" in reader.materials

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ObjReader.from_file(tmp_path / "nope.obj")

    def test_load_obj_places_mesh(self, tmp_path):
        (tmp_path / "quad.mtl").write_text(MTL)
        (tmp_path / "quad.obj").write_text("mtllib quad.mtl\n" + QUAD)

        scene = Scene()
        attached = load_obj(tmp_path / "quad.obj", scene, Matrix.translation(Vector3(0, 0, -3)))
        assert len(attached) == 2
        _, t = scene.nearest(Ray(Vector3(0.75, 0.5, 2), Vector3(0, 0, -1)))
        assert t == pytest.approx(5.0)

    def test_default_properties_are_opaque(self):
        assert isinstance(DEFAULT_PROPERTIES, MaterialProperties)
        assert DEFAULT_PROPERTIES.d == 1.0
