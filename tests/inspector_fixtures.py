"""
Shared JSON fixtures for inspector tests.
"""


def point(x, y, z=0.0):
    return {"X": x, "Y": y, "Z": z}


def square(x0, y0, size, z=0.0):
    return [
        point(x0, y0, z),
        point(x0 + size, y0, z),
        point(x0 + size, y0 + size, z),
        point(x0, y0 + size, z),
    ]


def profile_node(voids=True):
    node = {
        "discriminator": "Elements.Geometry.Profile",
        "Perimeter": {"discriminator": "Elements.Geometry.Polygon", "Vertices": square(0, 0, 4)},
    }
    if voids:
        node["Voids"] = [{"discriminator": "Elements.Geometry.Polygon", "Vertices": square(1, 1, 1)}]
    return node


def translation(x, y, z):
    return {"Matrix": {"Components": [1, 0, 0, x, 0, 1, 0, y, 0, 0, 1, z]}}


def extrude_element(element_id="w1", discriminator="Elements.Wall"):
    return {
        "Id": element_id,
        "discriminator": discriminator,
        "Name": "Wall",
        "Representation": {
            "SolidOperations": [{
                "discriminator": "Elements.Geometry.Solids.Extrude",
                "Profile": profile_node(voids=False),
                "Height": 3.0,
                "Direction": point(0, 0, 1),
                "IsVoid": False
            }]
        }
    }


def model_document():
    """Scene document with three elements: a material, a curve using it, a custom element."""
    return {
        "Transform": translation(0, 0, 0),
        "Elements": {
            "m1": {
                "discriminator": "Elements.Material",
                "Id": "m1",
                "Name": "Red",
                "Color": {"Red": 1.0, "Green": 0.0, "Blue": 0.0, "Alpha": 1.0}
            },
            "c1": {
                "discriminator": "Elements.ModelCurve",
                "Id": "c1",
                "Curve": {
                    "discriminator": "Elements.Geometry.Line",
                    "Start": point(0, 0),
                    "End": point(5, 0)
                },
                "Material": "m1"
            },
            "x1": {
                "discriminator": "Custom.Marker",
                "Id": "x1",
                "Label": "door"
            }
        }
    }


def referenced_profile_document():
    """Scene document whose extrusion names its profile by id."""
    profile = profile_node(voids=False)
    profile["Id"] = "p1"
    wall = extrude_element()
    wall["Representation"]["SolidOperations"][0]["Profile"] = "p1"
    return {
        "Transform": translation(0, 0, 0),
        "Elements": {"p1": profile, "w1": wall}
    }
