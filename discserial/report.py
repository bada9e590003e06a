import os
from typing import Dict, Iterable, List
import xmltodict
from lxml import etree
from discserial.identify import DiscIdentity

DATAFILE_DOCTYPE = ('<!DOCTYPE datafile PUBLIC "-//Logiqx//DTD ROM Management Datafile//EN" '
                    '"http://www.logiqx.com/Dats/datafile.dtd">')


def identity_to_entry(identity: DiscIdentity) -> Dict:
    return {'name': identity.name,
            'description': identity.name,
            'serial': identity.serial or '',
            'system': identity.system or '',
            'roms': [{'name': os.path.basename(identity.track_path),
                      'offset': str(identity.offset),
                      'size': str(identity.size)}]
            }


def read_report_dat(dat_file: str) -> Dict[str, Dict]:
    '''
    reads a previously written report back into entries keyed by game name
    '''
    with open(dat_file, 'r', encoding='utf-8') as f:
        raw_dat_dict = xmltodict.parse(f.read(), force_list=('game', 'rom',))

    entries = {}
    datafile = raw_dat_dict.get('datafile') or {}
    for game in datafile.get('game', []):
        name = game['@name']
        entries[name] = {'name': name,
                         'description': game.get('description') or name,
                         'serial': game.get('serial') or '',
                         'system': game.get('system') or '',
                         'roms': [{'name': rom['@name'],
                                   'offset': rom.get('@offset', '0'),
                                   'size': rom.get('@size', '0')}
                                  for rom in game.get('rom', [])]
                         }
    return entries


def build_report_tree(entries: Iterable[Dict], title: str) -> etree._ElementTree:
    root = etree.Element("datafile")

    header = etree.SubElement(root, "header")
    name = etree.SubElement(header, "name")
    name.text = title
    description = etree.SubElement(header, "description")
    description.text = title

    for entry in entries:
        game = etree.SubElement(root, "game")
        game.set("name", entry['name'])

        description = etree.SubElement(game, "description")
        description.text = entry['description']
        if entry['serial']:
            serial = etree.SubElement(game, "serial")
            serial.text = entry['serial']
        if entry['system']:
            system = etree.SubElement(game, "system")
            system.text = entry['system']

        for rom_details in entry['roms']:
            rom = etree.SubElement(game, "rom")
            rom.set("name", rom_details['name'])
            rom.set("offset", rom_details['offset'])
            rom.set("size", rom_details['size'])

    return etree.ElementTree(root)


def write_report_dat(identities: List[DiscIdentity], dat_file: str, title: str = 'discserial scan') -> int:
    """
    Write identities to a Logiqx style datafile. Games already present in an
    existing report are kept unless a new identity has the same name.

    :return: number of games in the written report
    """
    entries = read_report_dat(dat_file) if os.path.isfile(dat_file) else {}
    for identity in identities:
        entries[identity.name] = identity_to_entry(identity)

    tree = build_report_tree(sorted(entries.values(), key=lambda e: e['name']), title)
    xml_string = etree.tostring(tree, xml_declaration=True, pretty_print=True, doctype=DATAFILE_DOCTYPE,
                                encoding="UTF-8").decode("UTF-8")
    with open(dat_file, "w", encoding='utf-8') as f:
        f.write(xml_string)
    return len(entries)
