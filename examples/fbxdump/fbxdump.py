import sys
import argparse
from pathlib import Path
from fbx_formats.graphics.scene import Scene


# ------------------------------------------------------------------------------
def dump(args):

    if not args.input:
        raise Exception('No input file specified!')

    params = {
        'debug': args.debug,
        'strict_uv_channels': args.strict_uv,
    }

    inputpath = Path(args.input).resolve()
    print(F"Dumping geometry from '{inputpath.name}'")
    scene = Scene.from_file(inputpath, params)

    for geometry in scene.geometries:
        if args.name and geometry.name != args.name:
            continue
        print(geometry.dump(prefix='  '))

    return True


# ------------------------------------------------------------------------------
if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='fbxdump prints the triangulated meshes of a binary fbx file!')
    parser.add_argument('input', metavar='model.fbx', nargs='?', type=str, help='binary fbx file')
    parser.add_argument('--name', metavar='Cube', type=str, help='only dump the geometry with this name')
    parser.add_argument('--strict-uv', action='store_true', help='fail on uv channels outside 0-3 instead of skipping them')
    parser.add_argument('--debug', action='store_true', help='print decoding progress')
    args = parser.parse_args()
    try:
        dump(args)
        sys.exit(0)
    except Exception as e:
        print(e)
        sys.exit(1)
