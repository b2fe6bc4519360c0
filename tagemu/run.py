#!/usr/bin/env python3
"""
Command line entry point for the virtual tag emulator
"""

import sys
import argparse
import logging
from .config import get_config
from .records import load_tags_from_file
from .report import BatcherConfig, ReportBatcher
from .transport import ReportSender, open_serial_stream, open_tcp_stream, OVERSIZED_POLICIES
from .exceptions import TagEmuError

config = get_config()
logger = logging.getLogger(__name__)

def build_reports(args):
    tags = load_tags_from_file(args.file)
    batcher = ReportBatcher(BatcherConfig.from_config(config, args.pdu))
    return batcher.build(tags)

def cmd_serve(args):
    from .app import app, socketio
    
    print("🚀 Virtual Tag Emulator API")
    print("=" * 40)
    print(f"Host: {args.host}")
    print(f"Port: {args.port}")
    print(f"Debug: {args.debug}")
    print("=" * 40)
    socketio.run(app, debug=args.debug, host=args.host, port=args.port,
                 allow_unsafe_werkzeug=True)
    return 0

def cmd_batch(args):
    trds = build_reports(args)
    for i, trd in enumerate(trds, 1):
        flag = " (oversized)" if trd.oversized else ""
        print(f"Report {i}: {trd.tag_count} tags, {len(trd)} bytes{flag}")
    print(f"Total: {trds.total_tag_counts()} tags in {len(trds)} reports (PDU {args.pdu})")
    return 0

def cmd_send(args):
    trds = build_reports(args)
    if args.serial:
        stream = open_serial_stream(args.serial, args.baudrate)
    else:
        stream = open_tcp_stream(args.host, args.port)
    try:
        sender = ReportSender(stream, oversized_policy=args.oversized)
        sent = sender.send_stack(trds)
    finally:
        stream.close()
    print(f"Sent {sent} of {len(trds)} reports ({trds.total_tag_counts()} tags)")
    return 0

def build_parser():
    parser = argparse.ArgumentParser(description='Virtual RFID tag emulator')
    subparsers = parser.add_subparsers(dest='command', required=True)
    
    serve = subparsers.add_parser('serve', help='Run the tag management API')
    serve.add_argument('--host', default=config.HOST, help='Host address (default: %(default)s)')
    serve.add_argument('--port', type=int, default=config.PORT, help='Port number (default: %(default)s)')
    serve.add_argument('--debug', action='store_true', default=config.DEBUG, help='Enable debug mode')
    serve.set_defaults(func=cmd_serve)
    
    batch = subparsers.add_parser('batch', help='Show how a tag file is split into reports')
    batch.add_argument('file', help='Tag CSV file')
    batch.add_argument('--pdu', type=int, default=config.PDU_BUDGET, help='PDU budget in bytes (default: %(default)s)')
    batch.set_defaults(func=cmd_batch)
    
    send = subparsers.add_parser('send', help='Send a tag file as RO_ACCESS_REPORT messages')
    send.add_argument('file', help='Tag CSV file')
    send.add_argument('--pdu', type=int, default=config.PDU_BUDGET, help='PDU budget in bytes (default: %(default)s)')
    send.add_argument('--host', default=config.LLRP_HOST, help='LLRP host (default: %(default)s)')
    send.add_argument('--port', type=int, default=config.LLRP_PORT, help='LLRP port (default: %(default)s)')
    send.add_argument('--serial', help='Serial device to send to instead of TCP')
    send.add_argument('--baudrate', type=int, default=config.DEFAULT_BAUDRATE, help='Serial baud rate (default: %(default)s)')
    send.add_argument('--oversized', choices=OVERSIZED_POLICIES, default=config.OVERSIZED_POLICY,
                      help='Handling of reports over the PDU budget (default: %(default)s)')
    send.set_defaults(func=cmd_send)
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL), format=config.LOG_FORMAT)
    
    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\n👋 Stopped by user")
        return 0
    except TagEmuError as e:
        print(f"❌ Error: {e}")
        return 1

if __name__ == '__main__':
    sys.exit(main())
