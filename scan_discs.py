#!/usr/bin/env python3

""" scan_discs.py: Identify optical disc images (CUE, GDI, ISO and raw
images) by the serial number stored in their data track.
"""
import os
import sys
import argparse
import logging
import inquirer
from discserial.error_number import ErrorNumber
from discserial.identify import identify_image, list_sheet_files
from discserial.report import write_report_dat
from discserial.utils import save_data, restore_dict, list_menu, get_image_files

try:
    # settings are cached next to the script
    script_dir = os.path.abspath(os.path.dirname(__file__))
except NameError:
    script_dir = os.getcwd()

__version__ = '0.1'

logger = logging.getLogger('scan_discs')

IMAGE_EXTENSIONS = ('.cue', '.gdi', '.iso', '.bin', '.img', '.gcm', '.wbfs')

menu_msgs = {'0': 'Main Menu, select an option',
             'dir': 'Directory to scan',
             'file': 'Image or sheet to scan',
             'first': 'Use the first data track instead of the largest?',
             'dat': 'Write the results of this session to a DAT report?',
             'dat_path': 'DAT report file'
             }
menu_lists = {'0': [('1. Scan a directory', 'scan_dir_function'),
                    ('2. Scan a single image', 'scan_file_function'),
                    ('3. Track selection', 'first_track_function'),
                    ('4. Write DAT report', 'dat_function'),
                    ('5. Exit', 'Exit')]
              }


def collect_images(paths):
    '''
    expands directories to the images inside them, track files referenced by a
    sheet in the same directory are left to the sheet
    '''
    images = []
    for path in paths:
        if not os.path.isdir(path):
            images.append(path)
            continue
        referenced = set()
        for name in get_image_files(path, IMAGE_EXTENSIONS):
            full_path = os.path.join(path, name)
            if os.path.normcase(full_path) in referenced:
                continue
            if name.lower().endswith(('.cue', '.gdi')):
                referenced.update(os.path.normcase(f) for f in list_sheet_files(full_path))
            images.append(full_path)
    return images


def print_identity(identity):
    serial = identity.serial or 'not found'
    system = identity.system or 'unknown'
    print(f'{identity.name}: serial {serial}, system {system}')
    if identity.track_path != identity.path:
        print(f'    data track {identity.track_path} offset {identity.offset} size {identity.size}')


def scan_images(paths, first=False):
    '''
    returns the identities found and the number of images that failed
    '''
    identities = []
    failures = 0
    for path in collect_images(paths):
        error, identity = identify_image(path, first)
        if error != ErrorNumber.NoError:
            print(f'{path}: unsupported format ({error.name})')
            failures += 1
            continue
        print_identity(identity)
        identities.append(identity)
    return identities, failures


def list_files(paths):
    for path in paths:
        print(path)
        for track_path in list_sheet_files(path):
            print(f'    {track_path}')


'''
interactive menu functions
'''
def scan_dir_function(settings, session):
    answer = inquirer.prompt([inquirer.Path('dir', message=menu_msgs['dir'], exists=True,
                                            path_type=inquirer.Path.DIRECTORY,
                                            default=settings.get('last_dir', os.getcwd()))])
    if not answer:
        return
    settings.update({'last_dir': answer['dir']})
    identities, _ = scan_images([answer['dir']], settings.get('first', False))
    session.extend(identities)


def scan_file_function(settings, session):
    answer = inquirer.prompt([inquirer.Path('file', message=menu_msgs['file'], exists=True,
                                            path_type=inquirer.Path.FILE)])
    if not answer:
        return
    identities, _ = scan_images([answer['file']], settings.get('first', False))
    session.extend(identities)


def first_track_function(settings, session):
    first = inquirer.confirm(menu_msgs['first'], default=settings.get('first', False))
    settings.update({'first': first})


def dat_function(settings, session):
    if not session:
        print('Nothing has been scanned yet')
        return
    proceed = inquirer.confirm(menu_msgs['dat'], default=True)
    if not proceed:
        return
    answer = inquirer.prompt([inquirer.Text('dat_path', message=menu_msgs['dat_path'],
                                            default=settings.get('dat_path', 'discserial.dat'))])
    if not answer:
        return
    settings.update({'dat_path': answer['dat_path']})
    count = write_report_dat(session, answer['dat_path'])
    print(f'{answer["dat_path"]} now lists {count} games')


def main_menu(settings):
    session = []
    while True:
        print('\n')
        answer = list_menu('0', menu_lists['0'], menu_msgs['0'])
        if not answer or answer['0'] == 'Exit':
            break
        globals()[answer['0']](settings, session)
        save_data(settings, 'settings', script_dir)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Identify disc images by their serial number')
    parser.add_argument('paths', nargs='*', help='images, CUE/GDI sheets or directories to scan')
    parser.add_argument('--first', action='store_true', help='use the first data track instead of the largest')
    parser.add_argument('--dat', metavar='FILE', help='write or merge results into a DAT report')
    parser.add_argument('--list-files', action='store_true', help='list the files each sheet references')
    parser.add_argument('--verbose', '-v', action='store_true', help='debug logging')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s:%(name)s:%(message)s')

    if not args.paths:
        settings = restore_dict('settings', script_dir)
        main_menu(settings)
        save_data(settings, 'settings', script_dir)
        return 0

    if args.list_files:
        list_files(args.paths)
        return 0

    identities, failures = scan_images(args.paths, args.first)
    if args.dat:
        count = write_report_dat(identities, args.dat)
        logger.info(f'{args.dat} now lists {count} games')
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
