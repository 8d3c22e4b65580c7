# Generated via
# eth-staking-smith existing-mnemonic \
#   --chain holesky \
#   --num_validators 2 \
#   --mnemonic 'provide iron update bronze session immense garage want round enhance artefact position make wash analyst skirt float jealous trend spread ginger rapid express tool'
VALIDATOR_KEYS = {
    '0xb05e93c4501233eeb7f1e7b0ee400caaa04608249c4aab61c18e04c675aaf2a0f03808d533c877fbbd57b04927c01ce0': '0x3eeedd7a6679d2e2036682b6f03ef16105a847321303aec163548aa3fa5e9eeb',
    '0xaa84894836cb3d897a1a11344920c41c472ed67667fd8a3453e557214442370ffc1d007ae7af67120de00afa068349be': '0x236f33410e6972a2db36ba3736099396768219b327e18eae49392f153007d468',
}

# Generated via
# eth-staking-smith existing-mnemonic \
#   --chain holesky \
#   --num_validators 1 \
#   --mnemonic 'wheel treat brand feel motion atom card impose achieve rough shove bless glory wheel gold ensure maid despair turtle carry recall best outer fuel'
WITHDRAWAL_KEYS = {
    '0x9548e46c8e3b11d686b11fe5c4aea53a6ffd6cef622920fe8d73b4b7bff71938d2a0652b607fa6d757e840f3ddc2d7a4': '0x2c7310981a6e12bef7f444860b450c70235acd3e9f74e0a3ee82da3fdbc657a5',
}
